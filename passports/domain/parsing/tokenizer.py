from __future__ import annotations

from typing import Iterable, Iterator

from passports.domain.error_codes import ErrorCode
from passports.domain.exceptions import KeyFormatError, ValueFormatError
from passports.domain.models import Break, Pair, Token

KEY_SEPARATOR = ":"
LINE_END = "\n"
FIELD_SEPARATOR = " "


class Tokenizer:
    """
    Назначение/ответственность:
        Превращает поток символов в поток токенов Pair/Break.

    Алгоритм:
        - '\\n' в начале токена -> Break (пустая строка).
        - иначе ключ копится до ':'; '\\n' или конец файла внутри ключа -> KeyFormatError.
        - значение копится до '\\n' или пробела; ':' внутри значения -> ValueFormatError;
          конец файла завершает значение без ошибки.

    Инварианты:
        - Первая же ошибка формата фатальна: итератор дальше не используется.
    """

    def __init__(self, chars: Iterable[str]) -> None:
        self._chars = iter(chars)
        self._line_no = 1
        self._column = 0

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        c = self._read()
        if c is None:
            raise StopIteration
        if c == LINE_END:
            return Break(line_no=self._line_no - 1)
        return self._read_pair(c)

    def _read(self) -> str | None:
        c = next(self._chars, None)
        if c is None:
            return None
        if c == LINE_END:
            self._line_no += 1
            self._column = 0
        else:
            self._column += 1
        return c

    def _read_pair(self, initial: str) -> Pair:
        line_no = self._line_no
        key = [initial]
        while True:
            column = self._column + 1
            c = self._read()
            if c == KEY_SEPARATOR:
                break
            if c == LINE_END:
                raise KeyFormatError(ErrorCode.KEY_NEWLINE, "newline in key", line_no, column)
            if c is None:
                raise KeyFormatError(ErrorCode.KEY_EOF, "end of file in key", line_no, column)
            key.append(c)

        value: list[str] = []
        while True:
            c = self._read()
            if c is None or c == LINE_END or c == FIELD_SEPARATOR:
                break
            if c == KEY_SEPARATOR:
                raise ValueFormatError(ErrorCode.VALUE_COLON, ": in value", self._line_no, self._column)
            value.append(c)

        return Pair(key="".join(key), value="".join(value), line_no=line_no)


def tokenize(chars: Iterable[str]) -> Iterator[Token]:
    return Tokenizer(chars)
