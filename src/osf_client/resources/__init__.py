"""Resource groups of the OSF API."""

from osf_client.resources.base import BaseResource, build_query_string
from osf_client.resources.files import Files
from osf_client.resources.nodes import Nodes
from osf_client.resources.users import Users

__all__ = [
    "BaseResource",
    "Files",
    "Nodes",
    "Users",
    "build_query_string",
]
