"""
Terminal UI for dumpview.

A Textual-based browser for dumps held in the EntryStore.

Components:
    - DumpViewerApp: Main application class, polls the store
    - SelectionState: Cursor rules for the entry list
    - EntryListScreen: One row per entry
    - EntryDetailScreen: Value tree and backtrace of one entry
    - ValueTreePanel: Lazily expanded tree of a dumped value
"""
