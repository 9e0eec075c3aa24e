from __future__ import annotations

from typing import Iterable, Iterator

from passports.domain.models import Break, Pair, Passport, Token


def assemble_passports(tokens: Iterable[Token]) -> Iterator[Passport]:
    """
    Назначение:
        Группирует пары в паспорта. Break или конец потока закрывают
        непустую группу; подряд идущие пустые строки записей не порождают.

    Инварианты:
        - Повтор ключа внутри записи перезаписывает значение.
        - Ошибки токенизатора пробрасываются без обработки.
    """
    fields: dict[str, str] = {}
    line_no = 0
    for token in tokens:
        if isinstance(token, Pair):
            if not fields:
                line_no = token.line_no
            fields[token.key] = token.value
        elif isinstance(token, Break) and fields:
            yield Passport(fields=fields, line_no=line_no)
            fields = {}
    if fields:
        yield Passport(fields=fields, line_no=line_no)
