import secrets

# No 0/O or 1/I/L so ids can be read aloud and typed by hand.
DEFAULT_ALPHABET = "ABCDEFGHJKMNPQRSTUVWXYZ"
DEFAULT_LENGTH = 6


def id_space_size(alphabet: str = DEFAULT_ALPHABET, length: int = DEFAULT_LENGTH) -> int:
    return len(alphabet) ** length


def make_room_id(alphabet: str = DEFAULT_ALPHABET, length: int = DEFAULT_LENGTH) -> str:
    return "".join(secrets.choice(alphabet) for _ in range(length))
