"""Bengali phonetic keyboard — type Latin, get Bengali.

WHY: Typing Bengali on a Latin keyboard is easiest phonetically: "ami"
for আমি, "bangla" for বাংলা. This package converts each typed word when a
word boundary is reached and tells the host exactly which edit to make.

HOW: Three layers — the core (pattern table, transliterator, input
session), the host layer (key-code resolution, action sinks, the
keyboard controller), and the surfaces (CLI, Tkinter GUI, HTTP API).

RULES:
- The core is pure apart from InputSession's lock-guarded state
- Edit actions are applied by the host only after the session lock is released
- Surfaces never reimplement conversion logic; they call the core
"""

__version__ = "0.1.0"
