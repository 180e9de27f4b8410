import logging
import sys


class Log:
    """Centralized logging for the screensort worker.

    Keyword arguments are rendered as ``key=value`` pairs after the message so
    item identifiers and counts stay greppable in plain-text output.
    """

    _logger: logging.Logger = logging.getLogger("screensort")

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Configure the logger with the specified level and stdout handler."""
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(
                logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
            )
            cls._logger.addHandler(handler)

    @classmethod
    def info(cls, message: str, **context: object) -> None:
        cls._logger.info(cls._format(message, context))

    @classmethod
    def error(cls, message: str, **context: object) -> None:
        cls._logger.error(cls._format(message, context))

    @classmethod
    def exception(cls, message: str, **context: object) -> None:
        """Log an error together with the active exception traceback."""
        cls._logger.exception(cls._format(message, context))

    @classmethod
    def warning(cls, message: str, **context: object) -> None:
        cls._logger.warning(cls._format(message, context))

    @classmethod
    def debug(cls, message: str, **context: object) -> None:
        cls._logger.debug(cls._format(message, context))

    @staticmethod
    def _format(message: str, context: dict[str, object]) -> str:
        if not context:
            return message
        pairs = " ".join(f"{key}={value}" for key, value in context.items())
        return f"{message} [{pairs}]"
