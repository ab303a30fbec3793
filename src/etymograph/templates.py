"""
Etymology template parsing.

Turns a single template such as ``{{inh|en|enm|hound}}`` into zero or more
References. Only positional parameters are read; named parameters
(``t=``, ``pos=``, ...) are dropped before dispatch.

Supported template families:
    af, affix, com, compound   {{af|LANG|part1|part2|...}}
    pre, prefix                {{pre|LANG|prefix|base}}
    suf, suffix                {{suf|LANG|base|suffix}}
    con, confix                {{con|LANG|prefix|[base|]suffix}}
    inh, inherited             {{inh|LANG|SRCLANG|word}}
    bor, borrowed              {{bor|LANG|SRCLANG|word}}
    der, derived               {{der|LANG|SRCLANG|word}}
    m, mention                 {{m|LANG|word}}

Anything else yields no references.
"""

from typing import Callable, Iterable, Optional

from etymograph.models import Reference, RelationKind, Word

# Word value the markup uses for "omitted"
PLACEHOLDER = "-"


# =============================================================================
# Helpers
# =============================================================================


def split_components(template: str) -> list[str]:
    """Strip braces, split on pipes, drop named parameters, trim the rest."""
    body = template.strip("{}")
    return [comp.strip() for comp in body.split("|") if "=" not in comp]


def as_prefix(form: str) -> Optional[str]:
    """Normalize a prefix to end with a hyphen. Empty forms return None."""
    if not form:
        return None
    return form if form.endswith("-") else form + "-"


def as_suffix(form: str) -> Optional[str]:
    """Normalize a suffix to start with a hyphen. Empty forms return None."""
    if not form:
        return None
    return form if form.startswith("-") else "-" + form


def _ref(kind: RelationKind, language: str, word: str) -> Reference:
    return Reference(kind=kind, target=Word(language=language, word=word))


# =============================================================================
# Family handlers
#
# Each handler receives the positional components (name first) and returns
# the references for that template, or an empty list when the arguments
# are too few or invalid.
# =============================================================================


def _parse_affix(components: list[str]) -> list[Reference]:
    if len(components) < 3:
        return []
    lang = components[1]
    return [_ref(RelationKind.COMPONENT, lang, part) for part in components[2:]]


def _parse_prefix(components: list[str]) -> list[Reference]:
    if len(components) < 4:
        return []
    lang = components[1]
    prefix = as_prefix(components[2])
    if prefix is None:
        return []
    return [
        _ref(RelationKind.PREFIX, lang, prefix),
        _ref(RelationKind.COMPONENT, lang, components[3]),
    ]


def _parse_suffix(components: list[str]) -> list[Reference]:
    if len(components) < 4:
        return []
    lang = components[1]
    suffix = as_suffix(components[3])
    if suffix is None:
        return []
    return [
        _ref(RelationKind.COMPONENT, lang, components[2]),
        _ref(RelationKind.SUFFIX, lang, suffix),
    ]


def _parse_confix(components: list[str]) -> list[Reference]:
    if len(components) < 4:
        return []
    lang = components[1]
    prefix = as_prefix(components[2])
    if prefix is None:
        return []

    refs = [_ref(RelationKind.PREFIX, lang, prefix)]
    # Only {{con|LANG|pre|base|suf}} carries a base; the 4-component form is pre+suf
    if len(components) > 4:
        refs.append(_ref(RelationKind.COMPONENT, lang, components[3]))

    suffix = as_suffix(components[-1])
    if suffix is None:
        return []
    refs.append(_ref(RelationKind.SUFFIX, lang, suffix))
    return refs


def _descent_parser(kind: RelationKind) -> Callable[[list[str]], list[Reference]]:
    def parse(components: list[str]) -> list[Reference]:
        if len(components) < 4:
            return []
        # components[1] is the entry's own language; the source language follows
        return [_ref(kind, components[2], components[3])]

    return parse


def _parse_mention(components: list[str]) -> list[Reference]:
    if len(components) < 3:
        return []

    # The alternate display form is consulted for the emptiness check only;
    # the emitted word is always components[2].
    word = components[2]
    if word == "" and len(components) >= 4:
        word = components[3]
    if word == "":
        return []

    return [_ref(RelationKind.DERIVED, components[1], components[2])]


TEMPLATE_FAMILIES: dict[str, Callable[[list[str]], list[Reference]]] = {}

for _names, _handler in (
    (("af", "affix", "com", "compound"), _parse_affix),
    (("pre", "prefix"), _parse_prefix),
    (("suf", "suffix"), _parse_suffix),
    (("con", "confix"), _parse_confix),
    (("inh", "inherited"), _descent_parser(RelationKind.INHERITED)),
    (("bor", "borrowed"), _descent_parser(RelationKind.BORROWED)),
    (("der", "derived"), _descent_parser(RelationKind.DERIVED)),
    (("m", "mention"), _parse_mention),
):
    for _name in _names:
        TEMPLATE_FAMILIES[_name] = _handler


# =============================================================================
# Public API
# =============================================================================


def template_name(template: str) -> str:
    """Return the (trimmed) name of a template span, or '' if it has none."""
    components = split_components(template)
    return components[0] if components else ""


def parse_template(template: str) -> list[Reference]:
    """
    Parse one ``{{...}}`` span into the references it makes.

    Never raises: unknown templates, missing arguments and empty affix forms
    all produce an empty list. References whose word is the "-" placeholder
    are discarded.
    """
    components = split_components(template)
    if not components:
        return []

    handler = TEMPLATE_FAMILIES.get(components[0])
    if handler is None:
        return []

    return [ref for ref in handler(components) if ref.target.word != PLACEHOLDER]


def unique(refs: Iterable[Reference]) -> list[Reference]:
    """Drop exact duplicates, keeping the first occurrence of each reference."""
    return list(dict.fromkeys(refs))
