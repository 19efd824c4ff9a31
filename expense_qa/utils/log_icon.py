icon = {
    "running": "▶",
    "check": "✓",
    "cross": "✗",
    "info": "ℹ",
    "warning": "⚠",
    "question": "?",
}
