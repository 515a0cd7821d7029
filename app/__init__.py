"""
Configuration and front-ends (OpenCV window, PyQt6 desktop app)
"""
