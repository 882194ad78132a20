"""
The MODEL layer contains pure data structures and ingestion logic.
It has NO knowledge of the GUI (Qt) or the Visualization (PyVista).
It deals with the scene snapshot, its validation and JSON I/O.
"""
