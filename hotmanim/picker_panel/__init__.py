"""Working-directory picker shown over the main view."""

from .directory import DirectoryPicker, PickerEntry, list_picker_entries

__all__ = ["DirectoryPicker", "PickerEntry", "list_picker_entries"]
