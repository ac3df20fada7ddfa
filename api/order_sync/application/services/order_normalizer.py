"""
Normalizador de pedidos VTEX.

Transforma el pedido anidado devuelto por la API de OMS de VTEX a una fila
plana con un conjunto fijo y ordenado de columnas (ORDER_FIELDS).

Reglas:
- Nunca falla: cualquier rama ausente se resuelve a None via get_path.
- Todas las filas tienen exactamente las mismas claves, en el mismo orden,
  sin importar que sub-estructuras traia cada pedido.
- De las listas anidadas (items, pagos, entregas, ...) solo se proyecta el
  primer elemento.
- Los valores compuestos (taxData, cancellationData, subscriptionData) se
  serializan como JSON: para la hoja son un payload opaco.
"""
from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List, Mapping, Tuple

from order_sync.shared.utils.path_utils import get_path

FlatRow = Dict[str, Any]

KEY_FIELD = "orderId"
DATE_FIELD = "extractionDate"

# Sub-arboles "primer elemento" que se resuelven una sola vez por pedido.
# (nombre, scope padre, ruta dentro del padre)
_SCOPES: Tuple[Tuple[str, str, str], ...] = (
    ("item", "order", "items.0"),
    ("logistics", "order", "shippingData.logisticsInfo.0"),
    ("delivery", "logistics", "deliveryIds.0"),
    ("transaction", "order", "paymentData.transactions.0"),
    ("payment", "transaction", "payments.0"),
    ("price_tag", "item", "priceTags.0"),
    ("category", "item", "additionalInfo.categories.0"),
    ("total", "order", "totals.0"),
    ("benefit", "order", "ratesAndBenefitsData.rateAndBenefits.0"),
    ("gift_card", "transaction", "giftCards.0"),
)

# Columna -> (scope, ruta). extractionDate se completa aparte.
_FIELD_SOURCES: Tuple[Tuple[str, str, str], ...] = (
    ("orderId", "order", "orderId"),
    ("sellerOrderId", "order", "sellerOrderId"),
    ("origin", "order", "origin"),
    ("affiliateId", "order", "affiliateId"),
    ("salesChannel", "order", "salesChannel"),
    ("merchantName", "order", "merchantName"),
    ("status", "order", "status"),
    ("statusDescription", "order", "statusDescription"),
    ("value", "order", "value"),
    ("creationDate", "order", "creationDate"),
    ("lastChange", "order", "lastChange"),
    ("orderGroup", "order", "orderGroup"),
    ("clientId", "order", "clientProfileData.userProfileId"),
    ("shippingData.addressCity", "order", "shippingData.address.city"),
    ("shippingData.addressState", "order", "shippingData.address.state"),
    ("shippingData.addressCountry", "order", "shippingData.address.countryCode"),
    ("shippingData.logisticsInfo.itemIndex", "logistics", "itemIndex"),
    ("shippingData.logisticsInfo.selectedSla", "logistics", "selectedSla"),
    ("shippingData.logisticsInfo.lockTTL", "logistics", "lockTTL"),
    ("shippingData.logisticsInfo.price", "logistics", "price"),
    ("shippingData.logisticsInfo.listPrice", "logistics", "listPrice"),
    ("shippingData.logisticsInfo.sellingPrice", "logistics", "sellingPrice"),
    ("shippingData.logisticsInfo.deliveryCompany", "logistics", "deliveryCompany"),
    ("shippingData.logisticsInfo.shippingEstimate", "logistics", "shippingEstimate"),
    ("shippingData.logisticsInfo.deliveryChannel", "logistics", "deliveryChannel"),
    ("shippingData.logisticsInfo.deliveryIds.courierId", "delivery", "courierId"),
    ("shippingData.logisticsInfo.deliveryIds.courierName", "delivery", "courierName"),
    ("shippingData.logisticsInfo.deliveryIds.dockId", "delivery", "dockId"),
    ("shippingData.logisticsInfo.deliveryIds.quantity", "delivery", "quantity"),
    ("shippingData.logisticsInfo.deliveryIds.warehouseId", "delivery", "warehouseId"),
    ("shippingData.logisticsInfo.deliveryIds.accountCarrierName", "delivery", "accountCarrierName"),
    ("paymentData.giftCards.value", "gift_card", "value"),
    ("paymentData.giftCards.balance", "gift_card", "balance"),
    ("paymentData.giftCards.provider", "gift_card", "provider"),
    ("paymentData.transactions.isActive", "transaction", "isActive"),
    ("paymentData.transactions.merchantName", "transaction", "merchantName"),
    ("paymentData.transactions.payments.paymentSystem", "payment", "paymentSystem"),
    ("paymentData.transactions.payments.paymentSystemName", "payment", "paymentSystemName"),
    ("paymentData.transactions.payments.value", "payment", "value"),
    ("paymentData.transactions.payments.installments", "payment", "installments"),
    ("paymentData.transactions.payments.referenceValue", "payment", "referenceValue"),
    ("paymentData.transactions.payments.group", "payment", "group"),
    ("authorizedDate", "order", "authorizedDate"),
    ("invoicedDate", "order", "invoicedDate"),
    ("cancelReason", "order", "cancellationData.reason"),
    ("subscriptionData", "order", "subscriptionData"),
    ("taxData", "order", "taxData"),
    ("checkedInPickupPointId", "order", "checkedInPickupPointId"),
    ("cancellationData", "order", "cancellationData"),
    ("totals.id", "total", "id"),
    ("totals.name", "total", "name"),
    ("totals.value", "total", "value"),
    ("items.productId", "item", "productId"),
    ("items.quantity", "item", "quantity"),
    ("items.seller", "item", "seller"),
    ("items.name", "item", "name"),
    ("items.price", "item", "price"),
    ("items.listPrice", "item", "listPrice"),
    ("items.manualPrice", "item", "manualPrice"),
    ("items.priceTags.name", "price_tag", "name"),
    ("items.priceTags.value", "price_tag", "value"),
    ("items.priceTags.isPercentual", "price_tag", "isPercentual"),
    ("items.priceTags.rawValue", "price_tag", "rawValue"),
    ("items.priceTags.rate", "price_tag", "rate"),
    ("items.imageUrl", "item", "imageUrl"),
    ("items.detailUrl", "item", "detailUrl"),
    ("items.sellerSku", "item", "sellerSku"),
    ("items.priceValidUntil", "item", "priceValidUntil"),
    ("items.commission", "item", "commission"),
    ("items.tax", "item", "tax"),
    ("items.preSaleDate", "item", "preSaleDate"),
    ("items.additionalInfo.brandName", "item", "additionalInfo.brandName"),
    ("items.additionalInfo.brandId", "item", "additionalInfo.brandId"),
    ("items.additionalInfo.categoriesIds", "item", "additionalInfo.categoriesIds"),
    ("items.additionalInfo.categories.id", "category", "id"),
    ("items.additionalInfo.categories.name", "category", "name"),
    ("items.measurementUnit", "item", "measurementUnit"),
    ("items.unitMultiplier", "item", "unitMultiplier"),
    ("items.sellingPrice", "item", "sellingPrice"),
    ("items.isGift", "item", "isGift"),
    ("items.shippingPrice", "item", "shippingPrice"),
    ("items.rewardValue", "item", "rewardValue"),
    ("items.freightCommission", "item", "freightCommission"),
    ("items.taxCode", "item", "taxCode"),
    ("items.costPrice", "item", "costPrice"),
    ("ratesAndBenefitsData.description", "benefit", "description"),
    ("ratesAndBenefitsData.featured", "benefit", "featured"),
    ("ratesAndBenefitsData.id", "benefit", "id"),
    ("ratesAndBenefitsData.name", "benefit", "name"),
    ("ratesAndBenefitsData.couponCode", "benefit", "couponCode"),
    ("ratesAndBenefitsData.additionalInfo", "benefit", "additionalInfo"),
    ("marketplaceServicesEndpoint", "order", "marketplaceServicesEndpoint"),
    ("utmSource", "order", "marketingData.utmSource"),
    ("utmCampaign", "order", "marketingData.utmCampaign"),
    ("utmMedium", "order", "marketingData.utmMedium"),
)

# Columnas que se guardan como JSON (payload opaco para el destino).
COMPOSITE_FIELDS = frozenset({"subscriptionData", "taxData", "cancellationData"})

ORDER_FIELDS: Tuple[str, ...] = (DATE_FIELD,) + tuple(name for name, _, _ in _FIELD_SOURCES)


def _to_json_text(value: Any) -> Any:
    if not value:
        return None
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"), default=str)


def _scalar(value: Any) -> Any:
    """
    Convierte sub-estructuras inesperadas (dict/list) a texto JSON para que
    la fila siga siendo plana.
    """
    if isinstance(value, (dict, list, tuple)):
        return _to_json_text(value) if value else None
    return value


def _resolve_scopes(order: Mapping[str, Any]) -> Dict[str, Any]:
    scopes: Dict[str, Any] = {"order": order}
    for name, parent, path in _SCOPES:
        scopes[name] = get_path(scopes[parent], path, {})
    return scopes


def normalize_order(order: Any, run_date: str) -> FlatRow:
    """
    Convierte un pedido VTEX (detalle completo) en una fila plana.

    Args:
        order: Pedido tal como lo devuelve GET /api/oms/pvt/orders/{orderId}
        run_date: Fecha logica de la corrida (YYYY-MM-DD, UTC)

    Returns:
        Dict con exactamente las claves de ORDER_FIELDS, en ese orden
    """
    if not isinstance(order, Mapping):
        order = {}

    scopes = _resolve_scopes(order)
    row: FlatRow = {DATE_FIELD: run_date}
    for name, scope, path in _FIELD_SOURCES:
        value = get_path(scopes[scope], path)
        if name in COMPOSITE_FIELDS:
            row[name] = _to_json_text(value)
        else:
            row[name] = _scalar(value)
    return row


def normalize_orders(orders: Iterable[Any], run_date: str) -> List[FlatRow]:
    """Normaliza una secuencia de pedidos con la misma fecha de corrida."""
    return [normalize_order(order, run_date) for order in orders]
