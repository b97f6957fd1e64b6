"""
dumpview - live terminal viewer for structured debug dumps.

External processes push JSON dumps over TCP; dumpview keeps them in memory
and lets you browse them in a Textual UI.

Usage:
    dumpview 9337

Components:
    - ingest: value tree, deframer, decoder, entry store, TCP listener
    - tui: DumpViewerApp with list and detail screens
"""

__version__ = "0.3.0"
