from cons_arena.arena import Arena, SlotWriter
from cons_arena.borrow import READ, WRITE, BorrowTracker
from cons_arena.intern import SymbolTable
from cons_arena.state import ArenaState, Row

__all__ = [
    "Arena",
    "SlotWriter",
    "READ",
    "WRITE",
    "BorrowTracker",
    "SymbolTable",
    "ArenaState",
    "Row",
]
