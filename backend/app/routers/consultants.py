"""
Consultant management endpoints.

Thin HTTP wrappers over ConsultantDirectoryService. Service errors are
turned into responses by the handlers in error_handlers.py.
"""

from fastapi import APIRouter, Depends, Path, Response, status

from core.models import MAX_CONSULTANT_ID, Consultant
from core.services import ConsultantDirectoryService

from ..auth.dependencies import get_current_consultor
from ..dependencies import get_consultant_service
from ..schemas import ConsultantCreateRequest, ConsultantResponse, ConsultantUpdateRequest

router = APIRouter(prefix="/consultores", tags=["consultores"])


@router.get("", response_model=list[ConsultantResponse])
def list_consultants(
    service: ConsultantDirectoryService = Depends(get_consultant_service),
):
    """List all consultants ordered by apelido."""
    return service.list_consultants()


@router.get("/{consultant_id}", response_model=ConsultantResponse)
def get_consultant(
    consultant_id: int = Path(..., ge=1, le=MAX_CONSULTANT_ID),
    service: ConsultantDirectoryService = Depends(get_consultant_service),
):
    """Get one consultant by internal id."""
    return service.get_consultant(consultant_id)


@router.post("", status_code=status.HTTP_201_CREATED, response_class=Response)
def create_consultant(
    payload: ConsultantCreateRequest,
    service: ConsultantDirectoryService = Depends(get_consultant_service),
):
    """Register a consultant listed in the employee directory."""
    service.create_consultant(payload.apelido, payload.email, payload.senha)
    return Response(status_code=status.HTTP_201_CREATED)


@router.put("", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def update_consultant(
    payload: ConsultantUpdateRequest,
    current_consultor: Consultant = Depends(get_current_consultor),
    service: ConsultantDirectoryService = Depends(get_consultant_service),
):
    """Update the authenticated consultant's nickname, avatar and/or password."""
    service.update_consultant(
        current_consultor,
        apelido=payload.apelido,
        imagem=payload.imagem,
        senha=payload.senha,
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{consultant_id}", response_class=Response)
def delete_consultant(
    consultant_id: int = Path(..., ge=1, le=MAX_CONSULTANT_ID),
    service: ConsultantDirectoryService = Depends(get_consultant_service),
):
    """Delete a consultant and its avatar."""
    service.delete_consultant(consultant_id)
    return Response(status_code=status.HTTP_200_OK)
