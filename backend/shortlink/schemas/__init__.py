from .link import LinkCreate, LinkResponse, ResolveResponse, ErrorResponse, HealthResponse

__all__ = ["LinkCreate", "LinkResponse", "ResolveResponse", "ErrorResponse", "HealthResponse"]
