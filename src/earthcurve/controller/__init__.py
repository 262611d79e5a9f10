"""
The CONTROLLER layer turns user input into changes of the diagram state.
It has NO dependency on Qt so that it can be tested headless.
"""
