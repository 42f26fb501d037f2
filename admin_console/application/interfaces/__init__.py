from .resource_gateway import RecordInput, ResourceGateway

__all__ = [
    "RecordInput",
    "ResourceGateway",
]
