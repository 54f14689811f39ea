"""JSON:API envelope adapter."""

from osf_client.adapter.jsonapi import (
    FlattenedCollection,
    FlattenedResource,
    transform_list,
    transform_single,
)

__all__ = [
    "FlattenedCollection",
    "FlattenedResource",
    "transform_list",
    "transform_single",
]
