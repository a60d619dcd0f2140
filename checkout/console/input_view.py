from __future__ import annotations

import re
from typing import Callable, List

from ..data.models import LineStatus, PurchaseItem, PurchaseLineResult
from ..errors import InputFormatError
from ..logging import get_logger

_ITEM = re.compile(r"\[(?P<name>[^\[\]]+)-(?P<quantity>[0-9]+)\]")

PURCHASE_FORMAT = "[name-quantity] entries separated by commas, e.g. [cola-2],[water-1]"
YES_NO_FORMAT = "Y or N"


def parse_purchase(text: str) -> List[PurchaseItem]:
    """Parse `[name-quantity],[name-quantity]` into purchase items."""
    items: List[PurchaseItem] = []
    seen = set()
    for chunk in text.strip().split(","):
        match = _ITEM.fullmatch(chunk.strip())
        if match is None:
            raise InputFormatError(text, PURCHASE_FORMAT)
        name = match.group("name").strip()
        quantity = int(match.group("quantity"))
        if not name or quantity <= 0 or name in seen:
            raise InputFormatError(text, PURCHASE_FORMAT)
        seen.add(name)
        items.append(PurchaseItem(name=name, quantity=quantity))
    return items


def parse_yes_no(text: str) -> bool:
    answer = text.strip()
    if answer == "Y":
        return True
    if answer == "N":
        return False
    raise InputFormatError(text, YES_NO_FORMAT)


class InputView:
    """Console prompts. Badly formatted answers are reported and asked again."""

    def __init__(self, reader: Callable[[str], str] = input, writer: Callable[[str], None] = print) -> None:
        self.reader = reader
        self.writer = writer
        self.logger = get_logger(__name__)

    def _ask(self, question: str, parse):
        while True:
            text = self.reader(f"\n{question}\n")
            try:
                return parse(text)
            except InputFormatError as exc:
                self.logger.debug(f"Rejected input {text!r}")
                self.writer(f"[ERROR] {exc}")

    def read_purchase(self) -> List[PurchaseItem]:
        return self._ask("Enter the products and quantities to buy (e.g. [cola-2],[water-1])", parse_purchase)

    def ask_yes_no(self, question: str) -> bool:
        return self._ask(f"{question} (Y/N)", parse_yes_no)

    def confirm_line(self, result: PurchaseLineResult) -> bool:
        """Answer a pending purchase line."""
        name = result.product_name
        if result.status is LineStatus.SHORTFALL_NOTIFY:
            return self.ask_yes_no(
                f"Promotional stock of {name} is short by {result.shortfall} free unit(s). "
                f"Buy anyway without them?"
            )
        if result.status is LineStatus.UPSELL_OFFER:
            return self.ask_yes_no(
                f"Add {result.shortfall} more {name} to complete a '{result.promotion_name}' group?"
            )
        raise ValueError(f"Line for '{name}' is not awaiting confirmation")

    def confirm_membership(self) -> bool:
        return self.ask_yes_no("Apply the membership discount?")

    def confirm_continue(self) -> bool:
        return self.ask_yes_no("Would you like to buy anything else?")
