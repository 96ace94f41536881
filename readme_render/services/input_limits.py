from __future__ import annotations


class RenderInputTooLarge(ValueError):
    def __init__(self, size: int, limit: int) -> None:
        super().__init__(f"Markdown input is {size} bytes; the limit is {limit} bytes.")
        self.size = size
        self.limit = limit


def check_input_size(text: str, limit: int) -> None:
    size = len(text.encode("utf-8"))
    if size > limit:
        raise RenderInputTooLarge(size, limit)
