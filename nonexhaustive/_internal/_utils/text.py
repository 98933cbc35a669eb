def indent(text: str, by: int) -> str:
    pad = " " * by
    return pad + text.replace("\n", "\n" + pad)


def plural(count: int, noun: str) -> str:
    return f"{count} {noun}{'' if count == 1 else 's'}"


def plural_with_verb(count: int, noun: str, single: str = "was", many: str = "were") -> str:
    return f"{plural(count, noun)} {single if count == 1 else many}"
