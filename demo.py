"""
conceal — Live Demo
===================
Encrypts a nested record in place, shows what changed, then reveals it.

Run with:
  python demo.py
"""

import sys
import os

# Ensure the package root is on the path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from dataclasses import dataclass
from typing import List, Optional

from conceal import AESGCMCipher, Conceal, concealed


# ── ANSI colours ──────────────────────────────────────────────────────────────
GREEN   = "\033[92m"
YELLOW  = "\033[93m"
CYAN    = "\033[96m"
BOLD    = "\033[1m"
DIM     = "\033[2m"
RESET   = "\033[0m"
BLUE    = "\033[94m"


def sep(title: str = "", char: str = "─") -> None:
    width = 66
    if title:
        pad = (width - len(title) - 2) // 2
        print(f"\n{DIM}{char * pad} {RESET}{BOLD}{title}{RESET}{DIM} {char * (width - pad - len(title) - 2)}{RESET}")
    else:
        print(f"{DIM}{char * width}{RESET}")


def header(text: str) -> None:
    print(f"\n{BOLD}{BLUE}{text}{RESET}")
    sep()


@dataclass
class Class:
    name: str = concealed("data", default="")


@dataclass
class User:
    id:      str             = concealed("id", default="")
    name:    str             = concealed("data", default="")
    classes: List[Class]     = concealed("data", default_factory=list)
    top:     Optional[Class] = concealed("data", default=None)
    avatar:  bytes           = concealed("data", default=b"")
    country: str             = ""


def show(user: User) -> None:
    print(f"  id       {user.id!r}")
    print(f"  name     {CYAN}{user.name!r}{RESET}")
    for i, c in enumerate(user.classes):
        print(f"  class[{i}] {CYAN}{c.name!r}{RESET}")
    if user.top:
        print(f"  top      {CYAN}{user.top.name!r}{RESET}")
    print(f"  avatar   {CYAN}{user.avatar[:24]!r}{RESET}")
    print(f"  country  {user.country!r}  {DIM}(unannotated){RESET}")


def main():
    print()
    print(f"{BOLD}{'═' * 66}{RESET}")
    print(f"{BOLD}{'  CONCEAL — FIELD-LEVEL ENCRYPTION DEMO':^66}{RESET}")
    print(f"{BOLD}{'═' * 66}{RESET}")

    secret = os.environ.get("CONCEAL_SECRET", "demo-secret-change-me")
    guard = Conceal(AESGCMCipher(secret=secret), config="strict")

    user = User(
        id="1",
        name="John",
        classes=[Class("Cool")],
        top=Class("Cool 2"),
        avatar=b"hello world",
        country="NZ",
    )

    header("STEP 1 — RECORD")
    show(user)

    header("STEP 2 — FIELDS FOUND")
    result = guard.extract(user)
    print(f"  identifier  {result.identifier!r}")
    for path in result.paths():
        print(f"  {GREEN}✓{RESET} {path}")

    header("STEP 3 — PROTECT")
    count = guard.protect(user)
    print(f"  {YELLOW}{count} fields encrypted{RESET}")
    show(user)

    header("STEP 4 — REVEAL")
    guard.reveal(user)
    show(user)

    header("AUDIT TRAIL")
    for entry in guard.audit():
        print(f"  {entry['operation']:<8} {entry['path']:<22} {entry['kind']:<7} "
              f"id={entry['identifier']:<6} {GREEN}{entry['result']}{RESET}")
    print()


if __name__ == "__main__":
    main()
