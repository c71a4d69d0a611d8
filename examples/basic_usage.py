"""
Basic usage example for maskrepr.

Registers a few sensitive fields, renders an object with several presets and
logs it lazily through the standard logging module.
"""

import logging
import sys
from pathlib import Path

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from maskrepr import (
    CaseSensitivity,
    builder,
    fixed_length,
    multi_line_recursive_style,
    portion,
)


class Card:
    def __init__(self) -> None:
        self.number = "4111111111111111"
        self.holder = "Alice Example"


class Account:
    def __init__(self) -> None:
        self.user = "alice"
        self.Password = "hunter2"
        self.card = Card()
        self.roles = ["admin", "billing"]


def main() -> None:
    """Demonstrate rendering with obfuscated fields."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    log = logging.getLogger("example")

    snapshot = (
        builder(multi_line_recursive_style(lambda cls: cls is Card))
        .with_field("password", fixed_length(3), CaseSensitivity.INSENSITIVE)
        .with_field("number", portion(keep_at_end=4))
        .snapshot()
    )

    account = Account()
    print(snapshot.format(account))

    # Rendered only if the record is emitted
    log.info("account loaded: %s", snapshot.lazy(account))
    log.debug("never rendered: %s", snapshot.lazy(account))


if __name__ == "__main__":
    main()
