from pydantic import BaseModel


class ScriptRunRequest(BaseModel):
    script: str
