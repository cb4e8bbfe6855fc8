"""
Artifact delivery helpers for the API.
"""

from .file_download import FileDownload, count_midi_notes, get_file_download, get_relative_url

__all__ = ['FileDownload', 'count_midi_notes', 'get_file_download', 'get_relative_url']
