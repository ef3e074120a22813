"""
Pydantic models for client data.

A client is either an individual (``PF``, identified by a CPF) or an
organization (``PJ``, identified by a CNPJ and optionally a state
registration).  ``ClientCreate`` is the insertable shape; ``Client``
adds the server-assigned ``id``.
"""

from typing import Literal, Optional

from pydantic import Field

from .base import CamelModel, PartialUpdate

ClientType = Literal["PF", "PJ"]


class ClientBase(CamelModel):
    type: ClientType = Field(..., examples=["PJ"])
    name: str = Field(..., min_length=3, examples=["Construtora ABC Ltda"])
    trade_name: Optional[str] = Field(None, examples=["Construtora ABC"])
    document: str = Field(..., min_length=11, examples=["12345678000199"])
    state_registration: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    cellphone: Optional[str] = None
    zip_code: Optional[str] = None
    street: Optional[str] = None
    number: Optional[str] = None
    complement: Optional[str] = None
    neighborhood: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    notes: Optional[str] = None
    active: bool = True


class ClientCreate(ClientBase):
    """Schema for creating a client."""


class ClientUpdate(PartialUpdate):
    """Schema for updating a client.

    All fields are optional; only provided fields will be updated.
    """

    required_fields = frozenset({"type", "name", "document", "active"})

    type: Optional[ClientType] = None
    name: Optional[str] = Field(None, min_length=3)
    trade_name: Optional[str] = None
    document: Optional[str] = Field(None, min_length=11)
    state_registration: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    cellphone: Optional[str] = None
    zip_code: Optional[str] = None
    street: Optional[str] = None
    number: Optional[str] = None
    complement: Optional[str] = None
    neighborhood: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    notes: Optional[str] = None
    active: Optional[bool] = None


class Client(ClientBase):
    """A stored client record."""

    id: str
