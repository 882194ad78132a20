"""
The CORE layer: scale normalization, render projection and camera targeting.
Pure numpy; no Qt widgets and no PyVista objects.
"""
