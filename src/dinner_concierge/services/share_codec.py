"""Compact share-link encoding of an order set.

The payload is a base64 string (standard alphabet) wrapping a JSON array of
compact tuples::

    [{"u": "Jackson", "s": "s2", "ap": "ap1", "m": "m5", "al": ["al1"], "n": ""}]

Only item ids travel; names and prices are looked up again in the menu in
effect on the receiving side. There is no version field and no checksum.
"""

import base64
import binascii
import json
import logging
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from dinner_concierge.domain.errors import DecodeError
from dinner_concierge.domain.menu import FullMenu
from dinner_concierge.domain.orders import OrderSet, UserOrder

logger = logging.getLogger(__name__)

IMPORT_QUERY_PARAM = "import"


class CompactOrder(BaseModel):
    """Wire shape of one shared order."""

    model_config = ConfigDict(extra="ignore")

    u: str
    s: str = ""
    ap: str = ""
    m: str = ""
    al: list[str] = []
    n: str = ""


_COMPACT_LIST = TypeAdapter(list[CompactOrder])
_LINE_BREAKS = str.maketrans("", "", "\r\n\t")


def encode_orders(orders: OrderSet) -> str:
    """Encode orders, in insertion order, into a share payload."""
    compact = [
        CompactOrder(
            u=order.user_name,
            s=order.soup.id if order.soup else "",
            ap=order.appetizer.id if order.appetizer else "",
            m=order.main.id if order.main else "",
            al=order.add_on_ids(),
            n=order.notes,
        ).model_dump()
        for order in orders.values()
    ]
    text = json.dumps(compact, ensure_ascii=False, separators=(",", ":"))
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def decode_orders(payload: str, menu: FullMenu) -> OrderSet:
    """Decode a share payload against a menu.

    Ids missing from the menu are dropped, tuples without a name are skipped
    and every decoded order is marked confirmed.

    Raises:
        DecodeError: the payload is not base64, not JSON, or not a list of
            compact tuples.
    """
    raw = _b64decode(payload)
    try:
        text = raw.decode("utf-8")
        compact_list = _COMPACT_LIST.validate_json(text)
    except (UnicodeDecodeError, ValidationError) as exc:
        raise DecodeError("Share payload has an unexpected shape") from exc

    orders: OrderSet = {}
    for compact in compact_list:
        if not compact.u:
            continue
        add_ons = [menu.find_item(item_id) for item_id in compact.al]
        orders[compact.u] = UserOrder(
            user_name=compact.u,
            soup=menu.find_item(compact.s),
            appetizer=menu.find_item(compact.ap),
            main=menu.find_item(compact.m),
            a_la_carte=[item for item in add_ons if item is not None],
            notes=compact.n,
            is_confirmed=True,
        )
    return orders


def import_shared_orders(payload: str, menu: FullMenu) -> OrderSet:
    """Decode a share payload, treating any malformed payload as empty."""
    try:
        return decode_orders(payload, menu)
    except DecodeError:
        logger.warning("Failed to parse shared orders", exc_info=True)
        return {}


def build_share_link(base_url: str, payload: str) -> str:
    """Return a link that carries the payload as its import parameter."""
    separator = "&" if "?" in base_url else "?"
    return f"{base_url}{separator}{IMPORT_QUERY_PARAM}={quote(payload, safe='')}"


def _b64decode(payload: str) -> bytes:
    """Decode standard base64, tolerating URL-safe characters and lost padding."""
    # A query-string round trip turns "+" into spaces; pasted text may wrap.
    cleaned = payload.strip().translate(_LINE_BREAKS).replace(" ", "+")
    cleaned = cleaned.replace("-", "+").replace("_", "/")
    cleaned += "=" * (-len(cleaned) % 4)
    try:
        return base64.b64decode(cleaned, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError("Share payload is not valid base64") from exc
