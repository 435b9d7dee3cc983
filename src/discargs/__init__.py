"""discargs – Command-line grammar engine for disc-imaging tools.

Turns structured dump parameters into the exact argument strings expected by
DiscImageCreator, DiscImageChef (Aaru) and redumper, parses such strings
back, and derives sensible defaults for a given system and media type.
"""

__version__ = "0.1.0"
