"""
Orbit View
==========
Interactive 3D viewer for a central body and its orbiting entities.

Layers:
    model       Immutable scene snapshots, validation and JSON I/O.
    core        Scale normalization, render projection and camera targeting.
    controller  The event bridge turning selection/reset signals into camera focus.
    app         Qt state store shared by the panels and the 3D view.
    view        PySide6 + PyVista widgets.
"""
