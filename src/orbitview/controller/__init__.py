"""
The CONTROLLER layer connects external signals (selection, reset) to the camera core.
"""
