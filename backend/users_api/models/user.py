from pydantic import BaseModel, ConfigDict, StrictInt

# Request bodies are deliberately permissive – structural checks live in
# core/validation.py so every problem is reported in one 400 response.


class UserCreate(BaseModel):
    name: str | None = None
    email: str | None = None
    age: StrictInt | None = None


class UserUpdate(BaseModel):
    name: str | None = None
    email: str | None = None
    age: StrictInt | None = None


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    age: int
