from pydantic import BaseModel


class UserRead(BaseModel):
    id: str
    email: str
    full_name: str | None = None
    role: str

    class Config:
        from_attributes = True
        frozen = True
