"""Inference of HTTP verbs for controller methods."""

import logging

from typescripter.descriptors import HttpVerb, MethodDescriptor

logger = logging.getLogger(__name__)

# Checked in order, first match wins
VERB_PREFIXES: tuple[tuple[str, HttpVerb], ...] = (
    ("Get", HttpVerb.GET),
    ("Put", HttpVerb.PUT),
    ("Post", HttpVerb.POST),
    ("Update", HttpVerb.POST),
    ("Delete", HttpVerb.DELETE),
)


def resolve_verb(method: MethodDescriptor) -> HttpVerb | None:
    """Resolve the HTTP verb of a controller method.

    An explicit annotation always wins. Otherwise the verb is inferred from
    the method name prefix.

    Args:
        method: Method to resolve

    Returns:
        The resolved verb, or None when no verb can be inferred

    """
    if method.verb is not None:
        return method.verb

    for prefix, verb in VERB_PREFIXES:
        if method.name.startswith(prefix):
            return verb

    logger.debug("No HTTP verb annotation or prefix for method %s", method.name)
    return None
