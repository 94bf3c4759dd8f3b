"""
shapes_exceptions.py

Zentrale Exception-Hierarchie für die Schrödinger's-Shapes-Engine.
Definiert spezialisierte Exception-Klassen für die wenigen Fehlerszenarien,
die einen harten Abbruch rechtfertigen.

Erwartbare Zustände (Zug auf gesperrte Zelle, Undo ohne Historie,
unlösbares Puzzle) werden NICHT über Exceptions signalisiert, sondern über
Rückgabewerte. Exceptions gibt es nur für fehlerhafte Definitionen, die beim
Konstruieren erkannt werden.

Exception-Hierarchie:
    ShapesException (Basis)
    ├── PuzzleDefinitionException
    │   ├── InvalidBoardError
    │   └── InvalidConstraintError
    ├── GenerationException
    │   └── InvalidGeneratorConfigError
    └── ConfigurationException
        └── InvalidConfigError

Verwendung:
    from shapes_exceptions import InvalidConstraintError

    try:
        definition = PuzzleDefinition(board, constraints)
    except InvalidConstraintError as e:
        logger.error(f"Constraint ungültig: {e}")
        logger.error(f"Kontext: {e.context}")
"""

from typing import Any, Dict, Optional


class ShapesException(Exception):
    """
    Basis-Exception für alle Engine-spezifischen Fehler.

    Alle Exceptions unterstützen:
    - Detaillierte Fehlermeldungen
    - Kontextuelle Informationen (dict)
    - Original-Exception-Verkettung (via 'from')
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.original_exception = original_exception

    def __str__(self) -> str:
        base_msg = self.message

        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base_msg += f" | Context: {context_str}"

        if self.original_exception:
            base_msg += f" | Caused by: {type(self.original_exception).__name__}: {str(self.original_exception)}"

        return base_msg

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, context={self.context!r})"


# ============================================================================
# PUZZLE DEFINITION EXCEPTIONS
# ============================================================================


class PuzzleDefinitionException(ShapesException):
    """Basis-Exception für fehlerhafte Puzzle-Definitionen."""


class InvalidBoardError(PuzzleDefinitionException):
    """
    Das Spielfeld verletzt seine Invarianten.

    Ursachen:
    - Leeres Spielfeld (kleiner als 1x1)
    - Zeilen unterschiedlicher Länge
    - Ungültiger Shape-Wert in einer Zelle
    """

    def __init__(
        self,
        message: str,
        width: Optional[int] = None,
        height: Optional[int] = None,
        **kwargs,
    ):
        context = kwargs.get("context", {})
        if width is not None or "width" not in context:
            context["width"] = width
        if height is not None or "height" not in context:
            context["height"] = height
        kwargs["context"] = context
        super().__init__(message, **kwargs)


class InvalidConstraintError(PuzzleDefinitionException):
    """
    Ein Constraint passt nicht zum Spielfeld.

    Ursachen:
    - Zell-Constraint mit Koordinaten außerhalb des Spielfelds
    - Zeilen-/Spalten-Index außerhalb des gültigen Bereichs
    - Negativer Count
    - Fehlender Index bei Zeilen-/Spalten-Constraints
    """

    def __init__(self, message: str, constraint: Optional[Any] = None, **kwargs):
        context = kwargs.get("context", {})
        if constraint is not None or "constraint" not in context:
            context["constraint"] = constraint
        kwargs["context"] = context
        super().__init__(message, **kwargs)


# ============================================================================
# GENERATION EXCEPTIONS
# ============================================================================


class GenerationException(ShapesException):
    """Basis-Exception für Fehler im Puzzle-Generator."""


class InvalidGeneratorConfigError(GenerationException):
    """
    Die Generator-Konfiguration ist nicht erfüllbar.

    Ursachen:
    - Breite/Höhe kleiner 1
    - min_constraints > max_constraints
    - Mehr geforderte Superpositionen als Zellen
    """

    def __init__(self, message: str, config: Optional[Any] = None, **kwargs):
        context = kwargs.get("context", {})
        if config is not None or "config" not in context:
            context["config"] = config
        kwargs["context"] = context
        super().__init__(message, **kwargs)


# ============================================================================
# CONFIGURATION EXCEPTIONS
# ============================================================================


class ConfigurationException(ShapesException):
    """Basis-Exception für Konfigurationsfehler."""


class InvalidConfigError(ConfigurationException):
    """
    Ungültige Konfiguration.

    Ursachen:
    - YAML-Datei nicht parsebar
    - Fehlende Schwierigkeitsstufen
    - Ungültige Werte (negative Größen, unbekannte Schlüssel)
    """

    def __init__(self, message: str, config_path: Optional[str] = None, **kwargs):
        context = kwargs.get("context", {})
        if config_path is not None or "config_path" not in context:
            context["config_path"] = config_path
        kwargs["context"] = context
        super().__init__(message, **kwargs)


# ============================================================================
# UTILITY FUNCTIONS
# ============================================================================


def wrap_exception(
    exc: Exception,
    shapes_exception_class: type[ShapesException],
    message: str,
    **context,
) -> ShapesException:
    """
    Wandelt eine generische Exception in eine Engine-spezifische Exception um.

    Args:
        exc: Original-Exception
        shapes_exception_class: Ziel-Exception-Klasse (z.B. InvalidConfigError)
        message: Benutzerdefinierte Fehlermeldung
        **context: Zusätzliche Kontextinformationen

    Returns:
        Engine-spezifische Exception mit Original-Exception verkettet

    Beispiel:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise wrap_exception(e, InvalidConfigError, "YAML ungültig", path=str(path))
    """
    return shapes_exception_class(
        message=message, context=context, original_exception=exc
    )


def get_user_friendly_message(exc: Exception, include_details: bool = False) -> str:
    """
    Generiert eine benutzerfreundliche Fehlermeldung aus einer Exception.

    Args:
        exc: Exception-Objekt
        include_details: Ob technische Details angezeigt werden sollen

    Returns:
        Benutzerfreundliche Fehlermeldung in deutscher Sprache
    """
    friendly_messages = {
        InvalidBoardError: "[ERROR] Das Spielfeld ist ungültig. Alle Zeilen müssen gleich lang sein.",
        InvalidConstraintError: "[ERROR] Eine Regel des Puzzles passt nicht zum Spielfeld.",
        InvalidGeneratorConfigError: "[ERROR] Mit diesen Einstellungen kann kein Puzzle erzeugt werden.",
        InvalidConfigError: "[ERROR] Ungültige Konfiguration. Bitte überprüfe die Einstellungen.",
    }

    default_message = "[ERROR] Ein unerwarteter Fehler ist aufgetreten."

    user_message = friendly_messages.get(type(exc), default_message)

    if isinstance(exc, InvalidConstraintError) and exc.context.get("constraint"):
        user_message = (
            f"[ERROR] Die Regel '{exc.context['constraint']}' passt nicht zum Spielfeld."
        )

    if include_details and isinstance(exc, ShapesException):
        user_message += f"\n\nTechnische Details: {exc.message}"
        if exc.context:
            user_message += f"\n   Kontext: {exc.context}"

    return user_message
