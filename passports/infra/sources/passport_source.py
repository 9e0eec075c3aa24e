from __future__ import annotations

from typing import Iterable, Iterator

from passports.domain.models import Passport
from passports.domain.parsing.assembler import assemble_passports
from passports.domain.parsing.tokenizer import tokenize
from passports.infra.sources.char_source import CharSource


class PassportFileSource:
    """
    Назначение/ответственность:
        Источник паспортов из файла: CharSource -> Tokenizer -> assemble_passports.
        Каждая итерация заново открывает файл.
    """

    def __init__(self, path: str, encoding: str = "utf-8"):
        self.path = path
        self.encoding = encoding

    def __iter__(self) -> Iterator[Passport]:
        chars = CharSource(self.path, self.encoding)
        yield from assemble_passports(tokenize(chars))


def read_passports(chars: Iterable[str]) -> Iterator[Passport]:
    return assemble_passports(tokenize(chars))
