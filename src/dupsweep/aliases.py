from dupsweep.core.models import FilterField, FilterMode, HashAlgorithmName, SortKey
from dupsweep.core.query import DEFAULT_PRESETS

ALGORITHM_ALIASES = {
    "sha256": HashAlgorithmName.SHA256,
    "xxhash": HashAlgorithmName.XXHASH,
}

ALGORITHM_CHOICES = list(ALGORITHM_ALIASES.keys())

ALGORITHM_HELP_TEXT = (
    "Content digest used to compare files:\n"
    "  sha256     : SHA-256, collision resistant (default)\n"
    "  xxhash     : XXH3-128, faster, not cryptographic\n"
)

FILTER_MODE_ALIASES = {
    "and": FilterMode.AND,
    "or": FilterMode.OR,
}

FILTER_MODE_CHOICES = list(FILTER_MODE_ALIASES.keys())

FIELD_ALIASES = {
    "name": FilterField.NAME,
    "extension": FilterField.EXTENSION,
    "ext": FilterField.EXTENSION,
    "size": FilterField.SIZE,
    "date": FilterField.DATE,
}

SORT_ALIASES = {key.value: key for key in SortKey}

SORT_CHOICES = list(SORT_ALIASES.keys())

PRESET_CHOICES = list(DEFAULT_PRESETS.keys())

SEARCH_HELP_TEXT = (
    "Search query, tested against name, extension, size and date:\n"
    "  photoshop     : name contains 'photoshop'\n"
    "  .jpg          : extension or name contains '.jpg'\n"
    "  >100MB        : size comparison (<, <=, >, >= with B/KB/MB/GB)\n"
    "  older:30days  : age comparison (older/newer with days/weeks/months/years)\n"
)

PRESET_HELP_TEXT = (
    "Quick search presets, added to the active filters:\n"
    + "".join(f"  {name:<10}: {preset.query} ({preset.label})\n" for name, preset in DEFAULT_PRESETS.items())
)

EPILOG_TEXT = """
Examples:
  Find duplicates in Downloads folder
  %(prog)s -i ~/Downloads

  Only look two levels deep and hash with 4 threads
  %(prog)s -i ~/Downloads --max-depth 2 --workers 4

  Keep the oldest copy of every duplicate and delete the rest (with confirmation prompt)
  %(prog)s -i ~/Downloads --keep-one

  Same as above, limited to groups containing files over 100MB, without confirmation
  %(prog)s -i ~/Downloads --search ">100MB" --keep-one --force

  Browse a folder (non-recursive), files older than 30 days or bigger than 1GB, largest first
  %(prog)s -i ~/Downloads --list --filter older:30days --filter ">1GB" --sort size --desc

  Deletion is permanent. Files are removed, not moved to trash.
"""
