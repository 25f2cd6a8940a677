"""
Order processing example demonstrating guarded steps, sub-flows and
reverse flows with Waterfall.
"""

from waterfall import Flow, Middleware, Result, Step


# Steps
class CalculateTotals(Step):
    def execute(self, outflow):
        items = outflow.order['items']

        subtotal = sum(item['price'] * item['quantity'] for item in items)
        tax = round(subtotal * 0.08, 2)  # 8% tax

        print(f"✓ Calculated totals - Subtotal: ${subtotal:.2f}, Tax: ${tax:.2f}")
        return {'subtotal': subtotal, 'tax': tax, 'total': subtotal + tax}


class CreateShipment(Step):
    def execute(self, outflow):
        order = outflow.order
        shipment_id = f"SHIP-{order['id'][-3:]}"
        print(f"✓ Shipment created: {shipment_id}")
        return shipment_id


# Sub-flow: charges the customer, refunds if the parent order is dammed later
class ChargePayment(Flow):
    def __init__(self, order, total, ledger):
        super().__init__({'order': order, 'total': total})
        self.ledger = ledger

    def call(self):
        return (self
            .when_falsy(lambda o: o.order.get('card_declined'))
            .dam(lambda o: f"Card declined for {o.order['id']}")
            .chain(self._charge, 'payment_id'))

    def _charge(self, outflow):
        payment_id = f"PAY-{outflow.order['id'][-3:]}"
        self.ledger.append(('charge', payment_id, outflow.total))
        print(f"✓ Payment processed: {payment_id} (${outflow.total:.2f})")
        return payment_id

    def reverse_flow(self):
        payment_id = self.outflow.get('payment_id')
        if payment_id:
            self.ledger.append(('refund', payment_id, self.outflow.total))
            print(f"↺ Payment {payment_id} refunded")


# Middleware
class OrderLoggingMiddleware(Middleware):
    def execute(self, call, outflow, next_callable):
        order_id = (outflow.get('order') or {}).get('id', 'N/A')
        print(f"[{order_id}] → {call.kind} {call.name}")
        return next_callable(outflow)


def check_inventory(outflow):
    missing = [item['name'] for item in outflow.order['items'] if item.get('out_of_stock')]
    if missing:
        return Result.fail([f"Out of stock: {name}" for name in missing])
    return Result.ok(True)


def process_order(order, ledger, errors):
    """Run the order flow and return it, terminal."""
    return (Flow({'order': order})
        .use_middleware(OrderLoggingMiddleware())
        .when_truthy(lambda o: o.order.get('items'))
        .dam("Order has no items")
        .when_truthy(lambda o: o.order.get('customer_id'))
        .dam("Customer ID is missing")
        .chain(CalculateTotals(), 'totals')
        .chain_wf(lambda snap: ChargePayment(snap['order'], snap['totals']['total'], ledger),
                  'payment_id')
        .chain(check_inventory, 'inventory_available')
        .chain(CreateShipment(), 'shipment_id')
        .on_dam(lambda payload, o: errors.append((o.order['id'], payload))))


def create_sample_order(order_id, customer_id, **flags):
    order = {
        'id': order_id,
        'customer_id': customer_id,
        'items': [
            {'name': 'Widget', 'price': 19.99, 'quantity': 2},
            {'name': 'Gadget', 'price': 49.99, 'quantity': 1},
        ]
    }
    if flags.get('out_of_stock'):
        order['items'][1]['out_of_stock'] = True
    if flags.get('card_declined'):
        order['card_declined'] = True
    return order


def main():
    print("=" * 60)
    print("Waterfall Order Processing Example")
    print("=" * 60)

    orders = [
        create_sample_order('ORD-001', 'CUST-123'),
        create_sample_order('ORD-002', 'CUST-456', card_declined=True),
        create_sample_order('ORD-003', 'CUST-789', out_of_stock=True),
        create_sample_order('ORD-004', None),
    ]

    ledger = []
    errors = []
    flows = []
    for order in orders:
        print()
        flow = process_order(order, ledger, errors)
        flows.append(flow)
        if flow.is_open():
            print(f"✓ Order {order['id']} shipped as {flow.outflow.shipment_id}")
        else:
            print(f"✗ Order {order['id']} failed: {flow.block_payload}")

    print("\n" + "=" * 60)
    print(f"Summary: {sum(f.is_open() for f in flows)} successful, {len(errors)} failed")
    print(f"Ledger: {ledger}")
    print("=" * 60)
    return flows, ledger, errors


if __name__ == "__main__":
    main()
