import re

URL_RE = re.compile(r"https?://\S+", re.IGNORECASE)
EMAIL_RE = re.compile(r"[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}", re.IGNORECASE)
_TOKEN_RE = re.compile(r"\[\[KEEP_(\d+)\]\]")


def protect(text: str) -> tuple[str, list[str]]:
    """
    Swap URLs and emails for [[KEEP_n]] placeholders so the backend cannot
    translate them. URLs go first so an email inside a URL stays inside it.
    """
    keep: list[str] = []

    def _stash(m: re.Match) -> str:
        keep.append(m.group(0))
        return f"[[KEEP_{len(keep) - 1}]]"

    replaced = URL_RE.sub(_stash, text)
    replaced = EMAIL_RE.sub(_stash, replaced)
    return replaced, keep


def unprotect(text: str, keep: list[str]) -> str:
    seen: set[int] = set()

    def _restore(m: re.Match) -> str:
        idx = int(m.group(1))
        if idx >= len(keep):
            return ""
        seen.add(idx)
        return keep[idx]

    restored = _TOKEN_RE.sub(_restore, text)
    # Backends occasionally drop a placeholder; the kept value must still appear
    missing = [v for i, v in enumerate(keep) if i not in seen]
    if missing:
        restored = " ".join([restored.rstrip(), *missing]).strip()
    return restored
