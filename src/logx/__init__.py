"""Module-based structured logging.

This package provides per-module JSON loggers with:
- A process-wide registry of module loggers (get-or-create by name)
- Per-module level, source location capture and output sink
- Context extractors that add request-scoped values to every record

Example:
    >>> import io
    >>> from logx import new_options, register, with_context_extractor, with_output
    >>> from logx.extractors import mapping_extractor
    >>>
    >>> buffer = io.StringIO()
    >>> logger = register(
    ...     "payments",
    ...     new_options(
    ...         with_output(buffer),
    ...         with_context_extractor("request_id", mapping_extractor("request_id")),
    ...     ),
    ... )
    >>> logger.info_context({"request_id": "req-1"}, "charge accepted", amount=42)
"""

from logx.options import (
    ContextExtractor,
    Options,
    OptionsFunc,
    default_options,
    new_options,
    with_add_source,
    with_context_extractor,
    with_level,
    with_output,
    with_output_file,
)
from logx.registry import (
    DEFAULT_MODULE_NAME,
    Logx,
    default,
    get_logger,
    register,
    registered_modules,
)

__all__ = [
    "ContextExtractor",
    "DEFAULT_MODULE_NAME",
    "Logx",
    "Options",
    "OptionsFunc",
    "default",
    "default_options",
    "get_logger",
    "new_options",
    "register",
    "registered_modules",
    "with_add_source",
    "with_context_extractor",
    "with_level",
    "with_output",
    "with_output_file",
]
