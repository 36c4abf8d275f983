"""Package discovery for jobs that derive their follow-up command at run time.

A listing collaborator prints one installed item per line, name first::

    ripgrep v14.1.0:
        rg
    cargo-update v13.4.0:
        cargo-install-update

Only lines that start with a name token count; indented continuation lines
and blank lines are skipped.
"""

from __future__ import annotations

from collections.abc import Collection, Iterable


def leading_token(line: str) -> str | None:
    """Return the first maximal run of non-whitespace at the start of line.

    Lines that are empty or begin with whitespace have no leading token.
    """
    if not line or line[0].isspace():
        return None
    return line.split(maxsplit=1)[0]


def iter_tokens(output: str) -> Iterable[str]:
    for line in output.split("\n"):
        line = line.removesuffix("\r")
        token = leading_token(line)
        if token is not None:
            yield token


def derive_package_list(output: str, excluded: Collection[str] = ()) -> list[str]:
    """Build the ordered, de-duplicated package list from listing output.

    First occurrence wins; names in ``excluded`` never appear.

    Example:
        >>> derive_package_list("alpha 1.0\\nbeta 2.0\\nexcluded-1 3.0\\nalpha 1.0\\n", {"excluded-1"})
        ['alpha', 'beta']
    """
    seen: set[str] = set()
    packages: list[str] = []
    for name in iter_tokens(output):
        if name in seen or name in excluded:
            continue
        seen.add(name)
        packages.append(name)
    return packages
