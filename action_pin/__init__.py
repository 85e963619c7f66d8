"""
action-pin: pin GitHub Actions references to immutable commit hashes.

A library and CLI tool that scans workflow files for ``uses: owner/repo@ref``
references and either advances hash pins to the latest release or migrates
tag pins to commit hashes, keeping the tag as an inline comment.

Usage:
    from action_pin.core.scanner import scan_text
    refs = scan_text(Path(".github/workflows/ci.yml").read_text())
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
