from __future__ import annotations

from dataclasses import dataclass, field

from cons_core.domains import SymbolId


@dataclass(slots=True)
class SymbolTable:
    """Host-side symbol interning: one id per distinct name, ids never reused."""

    _ids: dict = field(default_factory=dict)
    _names: list = field(default_factory=list)

    def intern(self, name: str) -> SymbolId:
        sid = self._ids.get(name)
        if sid is None:
            sid = SymbolId(len(self._names))
            self._ids[name] = sid
            self._names.append(name)
        return sid

    def name(self, sid: SymbolId) -> str:
        if not 0 <= sid < len(self._names):
            raise KeyError(f"unknown symbol id {sid}")
        return self._names[sid]

    def __len__(self) -> int:
        return len(self._names)

    def __contains__(self, name) -> bool:
        return name in self._ids

    def clear(self) -> None:
        self._ids.clear()
        self._names.clear()


__all__ = ["SymbolTable"]
