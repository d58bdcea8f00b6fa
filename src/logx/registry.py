"""Module logger registry.

This module keeps one logger handle per module name for the lifetime of the
process. Handles write structured JSON records tagged with their module name
and enriched with values pulled from the context passed to each log call.

Example:
    >>> logger = register("payments", new_options(with_level("DEBUG")))
    >>> logger.info_context({"request_id": "req-1"}, "charge accepted", "amount", 42)
    >>>
    >>> same, found = get_logger("payments")
    >>> assert found and same is logger
"""

import logging
import threading
from typing import Any, Dict, List, Mapping, Optional, Tuple

from logx.options import ContextExtractor, Options, default_options
from logx.structured import FIELDS_ATTR, StdoutHandler, StructuredFormatter

DEFAULT_MODULE_NAME = "default"

# Key for values that have no usable key
BAD_KEY = "!BADKEY"

_module_loggers: Dict[str, "Logx"] = {}
_lock = threading.Lock()

logger = logging.getLogger(__name__)


def _module_name(name: Optional[str]) -> str:
    return name or DEFAULT_MODULE_NAME


class Logx:
    """Logger handle for a single module.

    A handle is bound to the options it was created with: level, source
    capture, sink and context extractors never change afterwards. Handles
    are safe to share between threads.

    Use :func:`register` to obtain one rather than constructing it directly.
    """

    def __init__(self, module_name: str, options: Optional[Options] = None) -> None:
        """Build the backend logger for ``module_name``.

        Args:
            module_name: Module name, already normalised.
            options: Logger options. If None, default options are used.
        """
        if options is None:
            options = default_options()

        self.module_name = module_name
        self.options = options
        self.context_extractors: Mapping[str, ContextExtractor] = (
            options.context_extractors
        )

        if options.output_file:
            handler: logging.Handler = logging.FileHandler(
                options.output_file, encoding="utf-8"
            )
        elif options.output is None:
            handler = StdoutHandler()
        else:
            handler = logging.StreamHandler(options.output)
        handler.setFormatter(
            StructuredFormatter(
                include_source_location=options.add_source,
                extra_fields={"module": module_name},
            )
        )

        # Not attached to the logging hierarchy, so records never reach
        # handlers configured on the root logger.
        self.logger = logging.Logger(f"logx.{module_name}", options.level)
        self.logger.propagate = False
        self.logger.addHandler(handler)
        self._handler = handler

    def __repr__(self) -> str:
        return f"<Logx module={self.module_name!r} level={logging.getLevelName(self.options.level)}>"

    def enabled(self, level: int) -> bool:
        """Check whether records at ``level`` would be emitted."""
        return self.logger.isEnabledFor(level)

    def debug_context(self, ctx: Any, msg: str, /, *args: Any, **fields: Any) -> None:
        """Log at DEBUG level with context-extracted values."""
        self._log(logging.DEBUG, ctx, msg, args, fields)

    def info_context(self, ctx: Any, msg: str, /, *args: Any, **fields: Any) -> None:
        """Log a message at INFO level with context-extracted values.

        Every registered extractor is called with ``ctx`` and its result is
        added to the record under the extractor's key.

        Args:
            ctx: Context the extractors read from. May be None.
            msg: The message to log.
            *args: Alternating key/value pairs to include in the record.
            **fields: Additional key/value pairs.
        """
        self._log(logging.INFO, ctx, msg, args, fields)

    def warn_context(self, ctx: Any, msg: str, /, *args: Any, **fields: Any) -> None:
        """Log at WARN level with context-extracted values."""
        self._log(logging.WARNING, ctx, msg, args, fields)

    warning_context = warn_context

    def error_context(self, ctx: Any, msg: str, /, *args: Any, **fields: Any) -> None:
        """Log at ERROR level with context-extracted values."""
        self._log(logging.ERROR, ctx, msg, args, fields)

    def log_context(
        self, level: int, ctx: Any, msg: str, /, *args: Any, **fields: Any
    ) -> None:
        """Log at an arbitrary level with context-extracted values."""
        self._log(level, ctx, msg, args, fields)

    def _log(
        self,
        level: int,
        ctx: Any,
        msg: str,
        args: Tuple[Any, ...],
        fields: Dict[str, Any],
    ) -> None:
        record_fields = _pairs_to_fields(args)
        record_fields.update(fields)
        for key, extractor in self.context_extractors.items():
            record_fields[key] = str(extractor(ctx))

        # stacklevel points the source location at the caller of *_context
        self.logger.log(level, msg, extra={FIELDS_ATTR: record_fields}, stacklevel=3)


def _pairs_to_fields(args: Tuple[Any, ...]) -> Dict[str, Any]:
    # A string key takes the next value. A trailing key or a non-string
    # in key position is kept as a value under BAD_KEY.
    fields: Dict[str, Any] = {}
    i = 0
    while i < len(args):
        key = args[i]
        if isinstance(key, str) and i + 1 < len(args):
            fields[key] = args[i + 1]
            i += 2
        else:
            fields[BAD_KEY] = key
            i += 1
    return fields


def register(module_name: Optional[str], options: Optional[Options] = None) -> Logx:
    """Create and register a logger for the given module.

    Registration is get-or-create: if a logger already exists for the
    module, it is returned and ``options`` is ignored. The first
    registration for a name decides its configuration.

    Options are not copied. Mutating the extractor mapping of ``options``
    after registration leads to undefined behaviour.

    Args:
        module_name: Module name. If empty, the default module name is used.
        options: Logger options. If None, default options are used.

    Returns:
        The new or existing logger for the module.
    """
    module_name = _module_name(module_name)

    existing = _module_loggers.get(module_name)
    if existing is not None:
        return existing

    with _lock:
        existing = _module_loggers.get(module_name)
        if existing is not None:
            return existing

        handle = Logx(module_name, options)
        _module_loggers[module_name] = handle

    logger.debug(f"Registered logger for module {module_name}")
    return handle


def get_logger(module_name: Optional[str]) -> Tuple[Optional[Logx], bool]:
    """Look up the logger for a module without creating one.

    Args:
        module_name: Module name. If empty, the default module name is used.

    Returns:
        Tuple of (logger, True) if registered, (None, False) otherwise.
    """
    handle = _module_loggers.get(_module_name(module_name))
    if handle is None:
        return None, False
    return handle, True


def default() -> Logx:
    """Return the default logger, creating it with default options if needed."""
    handle, _ = get_logger(DEFAULT_MODULE_NAME)
    if handle is None:
        return register("", None)
    return handle


def registered_modules() -> List[str]:
    """Get list of registered module names."""
    with _lock:
        return list(_module_loggers.keys())


def reset_registry() -> None:
    """Remove every registered logger (mainly for testing).

    Warning:
        Handles already obtained stop writing and are no longer returned
        by :func:`register` or :func:`get_logger`. Production code never
        needs this.
    """
    with _lock:
        for handle in _module_loggers.values():
            handle.logger.removeHandler(handle._handler)
            handle._handler.close()
        _module_loggers.clear()
