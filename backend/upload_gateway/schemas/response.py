from pydantic import BaseModel, ConfigDict


class ResponseMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: int
    message: str
