"""Order status, payment issue and refund lookups."""

from __future__ import annotations

from parts_agent.nlu.entities import ExtractedEntities, extract
from parts_agent.planner.types import Strategy
from parts_agent.services.orders import OrderService, OrderStatus, Transaction
from parts_agent.tools.base import Tool, ToolContext, ToolResponse

ASK_ORDER_NUMBER = (
    "I can help you check your order status. Could you please provide your order number? It's "
    "typically a 6-digit number found in your confirmation email or PartSelect account."
)
ASK_PAYMENT_DETAILS = (
    "I can help you with payment issues. Please provide your transaction ID or order number so I "
    "can look up the specific problem and guide you through the resolution."
)
ASK_REFUND_ORDER = (
    "I can help you with refunds and returns. Please provide your order number so I can look up "
    "your purchase and assist you with the return process."
)
START_REFUND = (
    "I can help you initiate a refund. Please provide the reason for the return and I'll start "
    "the process for you."
)

_STATUS_NOTES = {
    "shipped": "Your order is on its way! You can track your package using the tracking number above.",
    "processing": "Your order is being prepared for shipment. You'll receive tracking information once it ships.",
    "delivered": (
        "Your order has been delivered. If you need installation help or have any issues with your "
        "parts, I'm here to assist."
    ),
}


class TransactionTool(Tool):
    """Answer order inquiries, payment issues and refund questions from order records."""

    name = "transactions"
    strategy = Strategy.TRANSACTION

    def __init__(self, orders: OrderService) -> None:
        self._orders = orders

    async def run(self, context: ToolContext) -> ToolResponse:
        decision = context.decision
        entities = decision.entities if decision else extract(context.turn.content)
        kind = (decision.payload.get("kind") if decision else None) or "order_inquiry"

        if kind == "transaction_issue":
            return self._payment_issue(entities)
        if kind == "refund_request":
            return self._refund(entities)
        return self._order_inquiry(entities)

    def _order_inquiry(self, entities: ExtractedEntities) -> ToolResponse:
        order_id = entities.order_number
        if not order_id:
            return ToolResponse(content=ASK_ORDER_NUMBER, data={"kind": "order_inquiry"})

        order = self._orders.get_order_status(order_id)
        if order is None:
            return ToolResponse(
                content=(
                    f"I couldn't find an order with number {order_id}. Please double-check your order "
                    "number and try again. Order numbers are typically 6 digits long.\n\n"
                    "If you need help finding your order number, check your email confirmation or "
                    "PartSelect account."
                ),
                data={"kind": "order_inquiry", "order_id": order_id, "found": False},
                success=False,
            )

        transaction = self._orders.get_transaction_by_order_number(order_id)
        return ToolResponse(
            content=_format_order(order, transaction),
            data={"kind": "order_inquiry", "order_id": order_id, "status": order.status, "found": True},
        )

    def _payment_issue(self, entities: ExtractedEntities) -> ToolResponse:
        transaction_id = entities.transaction_id
        if transaction_id:
            issue = self._orders.get_payment_issue(transaction_id)
            if issue is not None:
                steps = "\n".join(
                    f"{number}. {step}" for number, step in enumerate(issue.resolution_steps, start=1)
                )
                return ToolResponse(
                    content=(
                        "Payment Issue Detected\n\n"
                        f"Issue: {issue.description}\n\n"
                        f"Resolution Steps:\n{steps}"
                    ),
                    data={"kind": "transaction_issue", "transaction_id": transaction_id, "issue": issue.issue_type},
                )

            transaction = self._orders.get_transaction(transaction_id)
            if transaction is not None:
                return ToolResponse(
                    content=(
                        f"I don't see any payment problems on transaction {transaction.transaction_id}. "
                        f"It was charged {transaction.total} to your {transaction.payment_method} for "
                        f"order {transaction.order_number}, and the order is {transaction.status}."
                    ),
                    data={"kind": "transaction_issue", "transaction_id": transaction_id, "issue": None},
                )

        elif entities.order_number:
            transaction = self._orders.get_transaction_by_order_number(entities.order_number)
            if transaction is not None:
                issue = self._orders.get_payment_issue(transaction.transaction_id)
                if issue is None:
                    return ToolResponse(
                        content=(
                            f"Order {transaction.order_number} was paid in full ({transaction.total}, "
                            f"{transaction.payment_method}). I don't see any payment problems on it."
                        ),
                        data={"kind": "transaction_issue", "order_id": entities.order_number, "issue": None},
                    )

        return ToolResponse(content=ASK_PAYMENT_DETAILS, data={"kind": "transaction_issue"})

    def _refund(self, entities: ExtractedEntities) -> ToolResponse:
        order_number = entities.order_number
        if not order_number:
            return ToolResponse(content=ASK_REFUND_ORDER, data={"kind": "refund_request"})

        refund = self._orders.get_refund_status(order_number)
        if refund is None:
            return ToolResponse(
                content=START_REFUND,
                data={"kind": "refund_request", "order_id": order_number, "found": False},
            )

        return ToolResponse(
            content=(
                f"Refund Status for Order {order_number}\n\n"
                f"Status: {refund.status.upper()}\n"
                f"Amount: {refund.amount}\n"
                f"Reason: {refund.reason}"
            ),
            data={"kind": "refund_request", "order_id": order_number, "status": refund.status},
        )


def _format_order(order: OrderStatus, transaction: Transaction | None) -> str:
    items = ", ".join(f"{item.name} ({item.quantity}x)" for item in order.items)
    lines = [
        f"Order {order.order_id} Status: {order.status.upper()}",
        "",
        f"Order Date: {order.order_date}",
        f"Items: {items}",
    ]
    if order.tracking_number:
        lines.append(f"Tracking Number: {order.tracking_number}")
    lines.append(f"Estimated Delivery: {order.estimated_delivery}")
    if transaction is not None:
        lines.append(f"Total: {transaction.total}")
        lines.append(f"Payment Method: {transaction.payment_method}")

    note = _STATUS_NOTES.get(order.status)
    if note:
        lines.extend(["", note])
    return "\n".join(lines)
