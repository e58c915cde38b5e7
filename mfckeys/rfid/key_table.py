"""Text table of a card's sector keys (layout based on the proxmark tools)."""

from .dump_reader import CardKeys

SEPARATOR = "+---+----------------+----------------+"


def render_header(card: CardKeys) -> list[str]:
    return [
        SEPARATOR,
        f"|{card.geometry.label:>3}|            {card.uid_hex:0>8}             |",
        SEPARATOR,
        "|sec|key A           |key B           |",
        SEPARATOR,
    ]


def render_key_table(card: CardKeys) -> str:
    """Render the UID and every sector's Key A / Key B in hex."""
    lines = render_header(card)
    for pair in card.keys:
        lines.append(f"|{pair.sector:03d}|  {pair.key_a_hex}  |  {pair.key_b_hex}  |")
    lines.append(SEPARATOR)
    return "\n".join(lines)
