"""Ready-made context extractors.

Each factory returns a function suitable for ``with_context_extractor``.
The returned functions never raise for a missing value; they return an
empty string instead.
"""

import contextvars
from collections.abc import Mapping
from typing import Any

from opentelemetry import trace
from opentelemetry.context import Context

from logx.options import ContextExtractor


def mapping_extractor(key: Any) -> ContextExtractor:
    """Extract ``key`` from a mapping-like context.

    Works with plain dicts and OpenTelemetry ``Context`` objects.

    Args:
        key: Key to look up in the context.

    Returns:
        Extractor returning the value as a string, or "" if absent.
    """

    def extract(ctx: Any) -> str:
        if not isinstance(ctx, Mapping):
            return ""
        value = ctx.get(key)
        return "" if value is None else str(value)

    return extract


def contextvar_extractor(var: contextvars.ContextVar) -> ContextExtractor:
    """Extract the value of a ``ContextVar``.

    If the log call's context is a ``contextvars.Context`` the variable is
    read from it, otherwise from the current context.
    """

    def extract(ctx: Any) -> str:
        if isinstance(ctx, contextvars.Context):
            value = ctx.get(var)
        else:
            value = var.get(None)
        return "" if value is None else str(value)

    return extract


def _span_context(ctx: Any) -> trace.SpanContext:
    span = trace.get_current_span(ctx if isinstance(ctx, Context) else None)
    return span.get_span_context()


def trace_id_extractor(ctx: Any) -> str:
    """Return the OpenTelemetry trace id of the active span as hex."""
    span_ctx = _span_context(ctx)
    if not span_ctx.is_valid:
        return ""
    return trace.format_trace_id(span_ctx.trace_id)


def span_id_extractor(ctx: Any) -> str:
    """Return the OpenTelemetry span id of the active span as hex."""
    span_ctx = _span_context(ctx)
    if not span_ctx.is_valid:
        return ""
    return trace.format_span_id(span_ctx.span_id)
