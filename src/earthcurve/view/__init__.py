"""
The VIEW layer: PySide6 widgets and the matplotlib export.
Views only read from the state stores and forward input to the controller.
"""
