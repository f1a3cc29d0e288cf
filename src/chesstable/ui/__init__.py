"""PyQt6 front end: table scene, main window and bootstrap."""
