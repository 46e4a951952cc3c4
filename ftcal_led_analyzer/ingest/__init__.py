"""Ingest package - LED file discovery and reading.

This package handles:
- Discovery of LED run files in a folder (*.txt carrying the run marker)
- Reading one LED file into a RunTable
- Extracting the numeric run identifier from the file name

Key classes:
- LedFileDiscovery: Scans a folder and builds an LedFileCatalog
- LedRunReader: Reads one file, derives positions and radial bins

Design principle:
- Readers produce immutable RunTable objects
- Strict by default: malformed tables are rejected, not patched
"""
