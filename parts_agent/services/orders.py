"""Read-only order, transaction, payment issue and refund lookups over mock data."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class OrderItem:
    part_number: str
    name: str
    quantity: int
    price: str


@dataclass(frozen=True, slots=True)
class OrderStatus:
    order_id: str
    status: str
    items: tuple[OrderItem, ...]
    order_date: str
    estimated_delivery: str
    tracking_number: str | None = None


@dataclass(frozen=True, slots=True)
class Transaction:
    transaction_id: str
    order_number: str
    total: str
    payment_method: str
    status: str
    subtotal: str = ""
    tax: str = ""
    shipping: str = ""


@dataclass(frozen=True, slots=True)
class PaymentIssue:
    transaction_id: str
    issue_type: str
    description: str
    resolution_steps: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class RefundStatus:
    refund_id: str
    transaction_id: str
    order_number: str
    reason: str
    amount: str
    status: str
    requested_at: str


_ORDERS: dict[str, OrderStatus] = {
    order.order_id: order
    for order in (
        OrderStatus(
            order_id="123456",
            status="shipped",
            items=(OrderItem("PS11756692", "Dishwasher Pump and Motor Assembly", 1, "$165.99"),),
            order_date="2025-01-20",
            estimated_delivery="Tomorrow",
            tracking_number="1Z999AA1234567890",
        ),
        OrderStatus(
            order_id="789012",
            status="processing",
            items=(
                OrderItem("PS2061451", "Refrigerator Ice Maker Assembly", 1, "$124.99"),
                OrderItem("PS2179605", "Refrigerator Water Filter", 2, "$49.99"),
            ),
            order_date="2025-01-21",
            estimated_delivery="3-5 business days",
        ),
        OrderStatus(
            order_id="987654",
            status="delivered",
            items=(OrderItem("PS11756692", "Dishwasher Pump & Motor Assembly", 1, "$165.99"),),
            order_date="2025-01-15",
            estimated_delivery="Delivered January 20, 2025",
            tracking_number="1Z999AA5555666777",
        ),
        OrderStatus(
            order_id="111222",
            status="cancelled",
            items=(OrderItem("PS733947", "Ice Maker Motor Kit", 1, "$78.50"),),
            order_date="2025-01-18",
            estimated_delivery="Order cancelled",
        ),
        OrderStatus(
            order_id="345678",
            status="delivered",
            items=(OrderItem("PS11739132", "Dishwasher Door Seal", 1, "$65.25"),),
            order_date="2025-01-15",
            estimated_delivery="Delivered",
            tracking_number="1Z999AA1234567891",
        ),
    )
}

_TRANSACTIONS: dict[str, Transaction] = {
    "TXN123456": Transaction(
        transaction_id="TXN123456",
        order_number="123456",
        subtotal="$165.99",
        tax="$13.28",
        shipping="$0.00",
        total="$179.27",
        payment_method="Visa ending in 4532",
        status="shipped",
    ),
}

_PAYMENT_ISSUES: dict[str, PaymentIssue] = {
    "TXN789012": PaymentIssue(
        transaction_id="TXN789012",
        issue_type="card_declined",
        description="Your credit card was declined during checkout.",
        resolution_steps=(
            "Verify your card information is correct",
            "Check with your bank for any holds or restrictions",
            "Try using a different payment method",
            "Contact customer service at 1-866-319-8402 for assistance",
        ),
    ),
}

_REFUNDS: dict[str, RefundStatus] = {
    "REF123456": RefundStatus(
        refund_id="REF123456",
        transaction_id="TXN123456",
        order_number="123456",
        reason="Part did not fit my dishwasher model",
        amount="$179.27",
        status="approved",
        requested_at="2025-01-22T09:15:00Z",
    ),
}


class OrderService:
    """Lookups return ``None`` for unknown identifiers."""

    def __init__(
        self,
        orders: dict[str, OrderStatus] | None = None,
        transactions: dict[str, Transaction] | None = None,
        payment_issues: dict[str, PaymentIssue] | None = None,
        refunds: dict[str, RefundStatus] | None = None,
    ) -> None:
        self._orders = orders if orders is not None else _ORDERS
        self._transactions = transactions if transactions is not None else _TRANSACTIONS
        self._payment_issues = payment_issues if payment_issues is not None else _PAYMENT_ISSUES
        self._refunds = refunds if refunds is not None else _REFUNDS

    def get_order_status(self, order_id: str) -> OrderStatus | None:
        return self._orders.get((order_id or "").strip())

    def get_transaction(self, transaction_id: str) -> Transaction | None:
        return self._transactions.get((transaction_id or "").strip().upper())

    def get_transaction_by_order_number(self, order_number: str) -> Transaction | None:
        for transaction in self._transactions.values():
            if transaction.order_number == order_number:
                return transaction
        return None

    def get_payment_issue(self, transaction_id: str) -> PaymentIssue | None:
        return self._payment_issues.get((transaction_id or "").strip().upper())

    def get_refund_status(self, order_number: str) -> RefundStatus | None:
        for refund in self._refunds.values():
            if refund.order_number == order_number:
                return refund
        return None
