"""Flatten JSON:API documents into plain dictionaries.

A resource object ``{"id", "type", "attributes", "relationships", "links"}``
becomes ``{"id", "type", **attributes, "relationships", "links"}``. Neither
function mutates its input.

If an attribute is itself named ``id`` or ``type`` it is hoisted after the
envelope fields and therefore takes precedence.
"""

from typing import Any

FlattenedResource = dict[str, Any]
FlattenedCollection = dict[str, Any]


def _flatten(resource: dict[str, Any]) -> FlattenedResource:
    flattened: FlattenedResource = {
        "id": resource["id"],
        "type": resource["type"],
        **(resource.get("attributes") or {}),
    }

    if resource.get("relationships") is not None:
        flattened["relationships"] = resource["relationships"]

    if resource.get("links") is not None:
        flattened["links"] = resource["links"]

    return flattened


def transform_single(envelope: dict[str, Any]) -> FlattenedResource:
    """Flatten a single-resource document.

    Args:
        envelope: JSON:API document whose ``data`` is one resource object

    Returns:
        The resource with attributes hoisted next to ``id`` and ``type``
    """
    return _flatten(envelope["data"])


def transform_list(envelope: dict[str, Any]) -> FlattenedCollection:
    """Flatten a collection document, keeping order, ``meta`` and ``links``.

    Args:
        envelope: JSON:API document whose ``data`` is a list of resource objects

    Returns:
        ``{"data": [...], "meta": ..., "links": ...}``; ``meta`` and ``links``
        are only present when the input has them
    """
    result: FlattenedCollection = {"data": [_flatten(item) for item in envelope["data"]]}

    if envelope.get("meta") is not None:
        result["meta"] = envelope["meta"]

    if envelope.get("links") is not None:
        result["links"] = envelope["links"]

    return result
