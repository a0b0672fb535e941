from pydantic import BaseModel, Field, model_validator
from typing import List, Optional
from datetime import date, datetime
from models.inventory_item import PalletKind
from models.zone import ZoneCategory
from schemas.location_schemas import RackLocation
import enum


class ExpiryStatus(str, enum.Enum):
    OK = "OK"
    WARNING = "WARNING"
    CRITICAL = "CRITICAL"


class ProductResponse(BaseModel):
    """Produto do catálogo"""
    code: str
    name: str
    category: str
    default_zone_category: Optional[ZoneCategory] = None

    class Config:
        from_attributes = True


class MixedItemSchema(BaseModel):
    """Linha de um pallet misto"""
    product_code: str
    product_name: Optional[str] = None  # preenchido a partir do catálogo
    quantity: int = Field(..., ge=1)
    expiration_date: date

    class Config:
        from_attributes = True


class ReceiveSingleRequest(BaseModel):
    """Request para receber um pallet de produto único"""
    product_code: str
    quantity: int = Field(..., ge=1)
    expiration_date: date
    received_by: Optional[str] = None


class ReceiveMixedRequest(BaseModel):
    """Request para receber um pallet misto"""
    items: List[MixedItemSchema] = Field(..., min_length=1)
    received_by: Optional[str] = None


class InventoryItemResponse(BaseModel):
    """Response de um pallet em estoque

    kind é o discriminador: MIXED sempre traz mixed_items, SINGLE nunca.
    """
    lpn: str
    kind: PalletKind
    product_code: str
    product_name: str
    quantity: int
    expiration_date: date
    reception_date: datetime
    received_by: str
    photos: List[str] = []
    mixed_items: List[MixedItemSchema] = []
    location: Optional[RackLocation] = None
    location_code: Optional[str] = None
    days_to_expiry: Optional[int] = None
    expiry_status: Optional[ExpiryStatus] = None

    @model_validator(mode="after")
    def check_contents(self):
        if self.kind == PalletKind.MIXED and not self.mixed_items:
            raise ValueError("Pallet misto sem itens")
        if self.kind == PalletKind.SINGLE and self.mixed_items:
            raise ValueError("Pallet único não pode ter itens mistos")
        return self


class ReceiveResponse(BaseModel):
    """Response da recepção (warning quando o vencimento é anterior ao estoque)"""
    item: InventoryItemResponse
    warning: Optional[str] = None


class LpnListRequest(BaseModel):
    """Request com lista de LPNs (despacho ou correção)"""
    lpns: List[str] = Field(..., min_length=1)


class BulkResult(BaseModel):
    processed: List[str]
    not_found: List[str]


class PhotoRequest(BaseModel):
    data_url: str = Field(..., min_length=1)
