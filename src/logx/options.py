"""Logger options built from a sequence of option functions.

Example:
    >>> opts = new_options(
    ...     with_level("DEBUG"),
    ...     with_output(buffer),
    ...     with_context_extractor("request_id", mapping_extractor("request_id")),
    ... )
"""

import logging
from dataclasses import dataclass, field, replace
from typing import IO, Any, Callable, Dict, Mapping, Optional, Union

ContextExtractor = Callable[[Any], str]


@dataclass(frozen=True)
class Options:
    """Configuration consumed once when a module logger is created.

    Attributes:
        level: Minimum level (a ``logging`` level number).
        add_source: Include the call site (file, function, line) in records.
        output: Text sink records are written to. ``None`` means the
            process's current standard output.
        output_file: Path of a log file opened in append mode when the
            logger is created. Takes the place of ``output`` when set.
        context_extractors: Field name to extractor function.
    """

    level: int = logging.INFO
    add_source: bool = True
    output: Optional[IO[str]] = None
    output_file: Optional[str] = None
    context_extractors: Mapping[str, ContextExtractor] = field(default_factory=dict)


OptionsFunc = Callable[[Options], Options]


def default_options() -> Options:
    """Return options with the default values filled in."""
    return Options()


def _parse_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    name = level.upper()
    if name == "WARN":
        name = "WARNING"
    return logging.getLevelNamesMapping().get(name, logging.INFO)


def with_level(level: Union[int, str]) -> OptionsFunc:
    """Set the logging level.

    Args:
        level: Level number or name (DEBUG, INFO, WARN, WARNING, ERROR).
            Unknown names fall back to INFO.
    """

    def apply(opts: Options) -> Options:
        return replace(opts, level=_parse_level(level))

    return apply


def with_add_source(add_source: bool) -> OptionsFunc:
    """Enable or disable source code location in log entries."""

    def apply(opts: Options) -> Options:
        return replace(opts, add_source=add_source)

    return apply


def with_output(output: Optional[IO[str]]) -> OptionsFunc:
    """Set the sink records are written to.

    If None, logs are written to standard output.
    """

    def apply(opts: Options) -> Options:
        return replace(opts, output=output, output_file=None)

    return apply


def with_output_file(path: str) -> OptionsFunc:
    """Write records to the file at ``path``, appending to it.

    The file is opened only if a new logger is created with these options.
    """

    def apply(opts: Options) -> Options:
        return replace(opts, output=None, output_file=path)

    return apply


def with_context_extractor(key: str, extractor: ContextExtractor) -> OptionsFunc:
    """Add a context extractor for the given field name.

    The extractor is called on every log call with the call's context and
    its result is logged under ``key``. Calls with distinct keys accumulate;
    a repeated key replaces the earlier extractor.
    """

    def apply(opts: Options) -> Options:
        extractors: Dict[str, ContextExtractor] = dict(opts.context_extractors)
        extractors[key] = extractor
        return replace(opts, context_extractors=extractors)

    return apply


def new_options(*option_fns: OptionsFunc) -> Options:
    """Create options from the defaults with each function applied in order."""
    opts = default_options()
    for option_fn in option_fns:
        opts = option_fn(opts)
    return opts

