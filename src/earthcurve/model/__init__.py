"""
The MODEL layer contains pure data structures and geometry.
It has NO knowledge of the GUI (Qt) or of plotting.
It deals with the Earth cross-section, drag transforms and the undo history.
"""
