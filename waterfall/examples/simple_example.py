"""
Simple example demonstrating the Waterfall pattern.
"""

import logging

from waterfall import Flow, LoggingMiddleware, TimingMiddleware


def greet(outflow):
    greeting = f"Hello, {outflow.name}!"
    print(f"Step: {greeting}")
    return greeting


def add_timestamp(outflow):
    import datetime
    timestamp = datetime.datetime.now().isoformat()
    print(f"Step: Added timestamp {timestamp}")
    return timestamp


def format_message(outflow):
    return f"{outflow.greeting} (at {outflow.timestamp})"


def build(name):
    timing = TimingMiddleware()
    flow = (Flow({'name': name})
        .use_middleware(LoggingMiddleware())
        .use_middleware(timing)
        .when_truthy(lambda o: o.name)
        .dam("name is required")
        .chain(greet, 'greeting')
        .chain(add_timestamp, 'timestamp')
        .chain(format_message, 'final_message')
        .on_dam(lambda payload, o: print(f"Step: dammed with {payload!r}")))
    return flow, timing


def main(name='Alice'):
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")

    print("=" * 60)
    print("Waterfall Simple Example")
    print("=" * 60)

    flow, timing = build(name)
    print(f"Flow: {flow}")

    if flow.is_open():
        print("✓ Flow completed")
        print(f"Final message: {flow.outflow['final_message']}")
    else:
        print(f"✗ Flow dammed: {flow.block_payload}")

    timing.log_report()
    return flow


if __name__ == "__main__":
    main()
