from upload_gateway.schemas.response import ResponseMessage

__all__ = [
    "ResponseMessage",
]
