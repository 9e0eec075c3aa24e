from __future__ import annotations

from typing import Iterator, TextIO


def iter_chars(stream: TextIO) -> Iterator[str]:
    """
    Назначение:
        Ленивая посимвольная выдача текстового потока в исходном порядке.
        Переводы строк выдаются как обычные символы.
    """
    for line in stream:
        yield from line


class CharSource:
    """
    Назначение/ответственность:
        Источник символов входного файла. Файл открывается при итерации и
        закрывается по её завершении; ошибки открытия/чтения (OSError,
        UnicodeDecodeError) пробрасываются как есть.
    """

    def __init__(self, path: str, encoding: str = "utf-8") -> None:
        self.path = path
        self.encoding = encoding

    def __iter__(self) -> Iterator[str]:
        with open(self.path, "r", encoding=self.encoding) as f:
            yield from iter_chars(f)
