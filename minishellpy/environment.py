"""Environment lists of ``KEY=value`` entries, as used by export and unset."""

from __future__ import annotations

from collections.abc import Iterable


def _is_alpha(char: str) -> bool:
    return ("a" <= char <= "z") or ("A" <= char <= "Z")


def _is_alnum(char: str) -> bool:
    return _is_alpha(char) or "0" <= char <= "9"


def is_valid_identifier(text: str) -> bool:
    """True when the part of ``text`` before any ``=`` is a valid name."""
    if not text or not (_is_alpha(text[0]) or text[0] == "_"):
        return False
    name = text.partition("=")[0]
    return all(char == "_" or _is_alnum(char) for char in name[1:])


def env_key(entry: str) -> str:
    """Return the name part of an entry."""
    return entry.partition("=")[0]


def find_env(env: list[str], key: str) -> int | None:
    """Return the index of the entry named ``key``, with or without a value."""
    for index, entry in enumerate(env):
        if entry.startswith(key) and entry[len(key):len(key) + 1] in ("=", ""):
            return index
    return None


def set_env(env: list[str], entry: str) -> None:
    """Replace the entry with the same name as ``entry``, or append it."""
    index = find_env(env, env_key(entry))
    if index is None:
        env.append(entry)
    else:
        env[index] = entry


def remove_env(env: list[str], key: str) -> bool:
    """Remove the entry named ``key``; return whether one was removed."""
    index = find_env(env, key)
    if index is None:
        return False
    del env[index]
    return True


def export_listing(env: Iterable[str]) -> list[str]:
    """Return the sorted ``declare -x`` lines that bare ``export`` prints."""
    lines = []
    for entry in sorted(env):
        key, equal, value = entry.partition("=")
        if equal:
            lines.append(f'declare -x {key}="{value}"')
        else:
            lines.append(f"declare -x {key}")
    return lines