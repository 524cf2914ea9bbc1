"""boardclip: connectivity-preserving copy, paste and removal of PCB copper networks."""

__version__ = "0.4.0"
