"""Reply text and tool-result messages built from tool outcomes."""

import json
from typing import Any, Sequence

from .models import FoundPair, Message, Product
from .scoring import display_value

TOOL_RESULT_HEADER = "TOOL_RESULT:"
CANDIDATE_BULLET = "•"


def _compact_json(data: Any) -> str:
    return json.dumps(data, ensure_ascii=False, separators=(",", ":"))


def price_line(product: Product) -> str:
    """``"<name> — $<price>"``."""
    return f"{display_value(product.name)} — ${display_value(product.price)}"


def candidates_reply(
    header: str, products: Sequence[Product], limit: int
) -> str:
    lines = [header]
    lines.extend(f"{CANDIDATE_BULLET} {price_line(p)}" for p in products[:limit])
    return "\n".join(lines)


def compare_tool_message(pair: FoundPair) -> Message:
    """System message carrying both records, the diffs and the pick."""
    return Message.system(
        "\n".join(
            [
                TOOL_RESULT_HEADER,
                f"A:{display_value(pair.a.name)}",
                f"B:{display_value(pair.b.name)}",
                f"A_specs:{_compact_json(pair.a.to_record())}",
                f"B_specs:{_compact_json(pair.b.to_record())}",
                f"DIFFS:{_compact_json(pair.diffs)}",
                f"RECOMMENDATION:{pair.recommendation}",
            ]
        )
    )


def compare_user_message(left: str, right: str) -> Message:
    return Message.user(f"User asked: Compare {left} and {right}.")


def product_tool_message(product: Product) -> Message:
    return Message.system(_compact_json({"product": product.to_record()}))


def product_user_message(message: str) -> Message:
    return Message.user(
        f'User asked: "{message}". '
        "Provide a brief product summary + quick recommendation."
    )
