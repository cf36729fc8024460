"""
Pydantic schemas for request and response bodies.

Request fields are loosely typed on purpose: presence and format checks are
done by core.validation so every input problem is reported the same way
(400 with a message) instead of as a schema error.
"""

from pydantic import BaseModel, ConfigDict


class ConsultantResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    nome_completo: str
    apelido: str
    email: str
    imagem: str | None = None
    admin: bool = False


class ConsultantCreateRequest(BaseModel):
    apelido: str | None = None
    email: str | None = None
    senha: str | None = None


class ConsultantUpdateRequest(BaseModel):
    apelido: str | None = None
    imagem: str | None = None
    senha: str | None = None
