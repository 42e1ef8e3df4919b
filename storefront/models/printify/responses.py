"""
Modelos de respuesta de la API Printify
Responsabilidad: Validar los payloads del proveedor en el borde HTTP
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class PrintifyBaseModel(BaseModel):
    """Modelo base para todos los modelos Printify"""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)


class PrintifyVariant(PrintifyBaseModel):
    id: int
    price: int = Field(ge=0, description="Price in minor units")
    is_enabled: bool = True
    is_available: bool = True
    is_default: bool = False
    title: str | None = None
    sku: str | None = None
    options: list[int] = Field(default_factory=list)


class PrintifyImage(PrintifyBaseModel):
    src: str
    variant_ids: list[int] = Field(default_factory=list)
    position: str | None = None
    is_default: bool = False


class PrintifyOptionValue(PrintifyBaseModel):
    id: int
    title: str


class PrintifyOption(PrintifyBaseModel):
    name: str
    type: str | None = None
    values: list[PrintifyOptionValue] = Field(default_factory=list)


class PrintifyProduct(PrintifyBaseModel):
    id: str
    title: str
    description: str = ""
    tags: list[str] = Field(default_factory=list)
    options: list[PrintifyOption] = Field(default_factory=list)
    variants: list[PrintifyVariant] = Field(default_factory=list)
    images: list[PrintifyImage] = Field(default_factory=list)
    visible: bool = True
    blueprint_id: int | None = None
    print_provider_id: int | None = None
    created_at: str | None = None
    updated_at: str | None = None


class PrintifyPage(PrintifyBaseModel):
    """Campos de paginación compartidos por los listados"""

    current_page: int = 1
    last_page: int = 1
    per_page: int | None = None
    total: int = 0
    next_page_url: str | None = None
    prev_page_url: str | None = None


class PrintifyProductsResponse(PrintifyPage):
    data: list[PrintifyProduct] = Field(default_factory=list)


class PrintifyShippingRates(PrintifyBaseModel):
    """Respuesta de orders/shipping.json (montos en centavos)"""

    standard: int | None = None
    express: int | None = None
    priority: int | None = None
    printify_express: int | None = None
    economy: int | None = None


class PrintifyOrderLineItem(PrintifyBaseModel):
    product_id: str
    variant_id: int
    quantity: int
    cost: int = 0
    shipping_cost: int = 0
    status: str | None = None


class PrintifyOrder(PrintifyBaseModel):
    id: str
    external_id: str | None = None
    label: str | None = None
    status: str = "unknown"
    line_items: list[PrintifyOrderLineItem] = Field(default_factory=list)
    address_to: dict[str, Any] = Field(default_factory=dict)
    total_price: int = 0
    total_shipping: int = 0
    total_tax: int = 0
    created_at: str | None = None
    sent_to_production_at: str | None = None
    fulfilled_at: str | None = None
    shipments: list[dict[str, Any]] = Field(default_factory=list)


class PrintifyOrdersResponse(PrintifyPage):
    data: list[PrintifyOrder] = Field(default_factory=list)
