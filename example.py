"""Example: interned flyweights, a subject with observers, and topic publish/subscribe."""

import logging
from datetime import datetime, timedelta

from internhub import FunctionObserver, TopicRegistry
from internhub.coffee import CoffeeFlavorFactory, CoffeeOrderContext
from internhub.library import BookFactory, BookRecordManager

logging.basicConfig(level=logging.INFO)


def coffee_orders() -> None:
    factory = CoffeeFlavorFactory()
    orders = [
        ("Cappuccino", 2), ("Cappuccino", 2), ("Frappe", 1), ("Frappe", 1),
        ("Xpresso", 1), ("Frappe", 897), ("Cappuccino", 97), ("Cappuccino", 97),
        ("Frappe", 3), ("Xpresso", 3), ("Cappuccino", 3), ("Xpresso", 96),
        ("Frappe", 552), ("Cappuccino", 121), ("Xpresso", 121),
    ]
    taken = [(factory.get_coffee_flavor(name), CoffeeOrderContext(table)) for name, table in orders]
    for flavor, context in taken:
        print(flavor.serve(context))
    print(f"total CoffeeFlavor objects made: {factory.total_flavors_made()}")


def library_records() -> None:
    manager = BookRecordManager(BookFactory())
    manager.add_observer(FunctionObserver(lambda event: print(f"{event.action}: {event.record.record_id}")))

    now = datetime.now()
    manager.add_book_record("copy-1", "Dune", "Frank Herbert", "sf", 412, "ace", "978-0441013593")
    manager.add_book_record("copy-2", "Dune", "Frank Herbert", "sf", 412, "ace", "978-0441013593")
    manager.update_checkout_status("copy-1", False, now, "member-7", now + timedelta(days=14))
    manager.extend_checkout_period("copy-1", now + timedelta(days=21))
    print(manager.summary())


def mail_inbox() -> None:
    registry = TopicRegistry()
    counter = {"new": 0}

    def preview(topic, data):
        print(f"A new message was received: {topic} from {data['sender']}: {data['body']}")

    def count(topic, data):
        counter["new"] += 1
        print(f"new messages: {counter['new']}")

    first = registry.subscribe("inbox/newMessage", preview)
    second = registry.subscribe("inbox/newMessage", count)
    registry.publish("inbox/newMessage", {"sender": "hello@google.com", "body": "Hey there! How are you doing today?"})

    registry.unsubscribe(first)
    registry.unsubscribe(second)


def main() -> None:
    coffee_orders()
    library_records()
    mail_inbox()


if __name__ == "__main__":
    main()
