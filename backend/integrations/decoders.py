"""
Decoders from marketplace API payloads to domain records.

Payloads are validated once, here. Required fields that are missing raise
DecodeError; optional fields fall back to defaults so a partially filled
record never leaks past this module.
"""
import logging
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Iterable, Optional, Tuple

from django.utils.dateparse import parse_datetime

from business_hours.exceptions import InvalidWeeklySchedule
from business_hours.schedule import DaySchedule, WeeklySchedule
from cart.aggregator import CartEntry, CartSnapshot, CatalogEntry, MappingCatalog
from orders.calculators import DeliveryPolicy, PriceBreakdown
from orders.domain import OrderItemRecord, OrderRecord
from orders.status import OrderStatusMachine
from payments.money import quantize, to_decimal

from .exceptions import DecodeError

logger = logging.getLogger(__name__)

_MISSING = object()


def _require(payload: Dict[str, Any], field: str):
    if not isinstance(payload, dict):
        raise DecodeError(field, payload, f"Expected an object holding '{field}', got {type(payload).__name__}")
    value = payload.get(field, _MISSING)
    if value is _MISSING or value is None:
        raise DecodeError(field, payload)
    return value


def _as_int(value, field: str, payload=None) -> int:
    if isinstance(value, bool):
        raise DecodeError(field, payload)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise DecodeError(field, payload)


def _as_bool(value, field: str, payload=None, default: bool = False) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    raise DecodeError(field, payload)


def decode_decimal(value, field: str = "amount", default: Optional[Decimal] = None) -> Decimal:
    """Decimal from a JSON number or string; ``default`` when absent."""
    if value is None or value == "":
        if default is None:
            raise DecodeError(field)
        return default
    try:
        return to_decimal(value)
    except ValueError:
        raise DecodeError(field, value)


def decode_timestamp(value) -> Optional[datetime]:
    """ISO 8601 timestamp, or None when absent or unparseable."""
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    try:
        parsed = parse_datetime(value)
    except (TypeError, ValueError):
        parsed = None
    if parsed is None:
        logger.warning(f"Ignoring unparseable timestamp {value!r}")
    return parsed


def decode_day_schedule(payload: Dict[str, Any]) -> DaySchedule:
    weekday = _as_int(_require(payload, "dia"), "dia", payload)
    try:
        return DaySchedule(
            weekday=weekday,
            closed=_as_bool(payload.get("fechado"), "fechado", payload),
            open_time=payload.get("horario_abertura") or "00:00",
            close_time=payload.get("horario_fechamento") or "00:00",
        )
    except InvalidWeeklySchedule as e:
        raise DecodeError("dia", payload, str(e))


def decode_weekly_schedule(rows: Iterable[Dict[str, Any]]) -> WeeklySchedule:
    """
    Schedule from a list of business-hours rows.

    When the API returns a weekday twice the first row wins. Times are not
    parsed here; a malformed time is reported by the availability check.
    """
    days = {}
    for row in rows or ():
        day = decode_day_schedule(row)
        if day.weekday in days:
            logger.warning(f"Duplicate business hours for {day.name}; keeping the first entry")
            continue
        days[day.weekday] = day
    return WeeklySchedule.from_days(days.values())


def decode_delivery_policy(payload: Dict[str, Any]) -> DeliveryPolicy:
    payload = payload or {}
    return DeliveryPolicy(
        fee_amount=decode_decimal(payload.get("taxa_entrega"), "taxa_entrega", Decimal("0.00")),
        free_threshold=decode_decimal(payload.get("valor_minimo_entrega"), "valor_minimo_entrega", Decimal("0.00")),
    )


def decode_price_breakdown(payload: Dict[str, Any]) -> PriceBreakdown:
    """Cart totals as rendered by the API (`totais`)."""
    payload = payload or {}
    zero = Decimal("0.00")
    subtotal = quantize(decode_decimal(payload.get("subtotal"), "subtotal", zero))
    delivery_fee = quantize(decode_decimal(payload.get("delivery_fee"), "delivery_fee", zero))
    total = quantize(decode_decimal(payload.get("total"), "total", subtotal + delivery_fee))
    return PriceBreakdown(subtotal, delivery_fee, total)


def decode_order_item(payload: Dict[str, Any]) -> OrderItemRecord:
    catalog_item_id = payload.get("catalogo_produto_id")
    return OrderItemRecord(
        catalog_item_id=int(catalog_item_id) if catalog_item_id is not None else None,
        name=payload.get("nome") or "",
        unit_price=decode_decimal(payload.get("valor_unitario_venda"), "valor_unitario_venda"),
        quantity=_as_int(_require(payload, "quantidade"), "quantidade", payload),
    )


def decode_order(payload: Dict[str, Any]) -> OrderRecord:
    order_id = _as_int(_require(payload, "idpedido"), "idpedido", payload)
    client = payload.get("cliente") or {}
    establishment_id = payload.get("estabelecimento_id")
    zero = Decimal("0.00")

    return OrderRecord(
        order_id=order_id,
        establishment_id=int(establishment_id) if establishment_id is not None else None,
        client_id=client.get("id"),
        status=OrderStatusMachine.decode_status(payload.get("status")),
        placed_at=decode_timestamp(payload.get("data_pedido")),
        last_updated_at=decode_timestamp(payload.get("updated_at")),
        total=decode_decimal(payload.get("valor_total"), "valor_total", zero),
        subtotal=decode_decimal(payload.get("subtotal"), "subtotal", zero),
        delivery_fee=decode_decimal(payload.get("taxa_entrega"), "taxa_entrega", zero),
        items=tuple(decode_order_item(item) for item in payload.get("pedido_itens") or ()),
    )


def decode_cart(payload: Dict[str, Any]) -> Tuple[CartSnapshot, MappingCatalog]:
    """
    Cart snapshot plus the catalog prices the API returned with it.

    The catalog lets the client price the cart locally, e.g. to preview an
    optimistic quantity change before the server confirms it.
    """
    cart_id = _as_int(_require(payload, "idcarrinho"), "idcarrinho", payload)
    establishment = payload.get("estabelecimento")

    establishment_id = None
    policies = {}
    if establishment:
        establishment_id = _as_int(_require(establishment, "id"), "estabelecimento.id", establishment)
        policies[establishment_id] = decode_delivery_policy(establishment)

    entries = []
    catalog_entries = []
    for item in payload.get("itens") or ():
        product = _require(item, "catalogo_produto")
        catalog_item_id = _as_int(_require(product, "id"), "catalogo_produto.id", product)
        entries.append(CartEntry(
            catalog_item_id=catalog_item_id,
            quantity=_as_int(_require(item, "quantidade"), "quantidade", item),
            item_id=item.get("idcarrinho_item"),
        ))
        catalog_entries.append(CatalogEntry(
            catalog_item_id=catalog_item_id,
            unit_price=decode_decimal(product.get("valor_venda"), "valor_venda"),
            establishment_id=product.get("estabelecimento_id", establishment_id),
            name=product.get("nome") or "",
        ))

    snapshot = CartSnapshot(cart_id=cart_id, establishment_id=establishment_id, entries=tuple(entries))
    return snapshot, MappingCatalog(catalog_entries, policies)
