from dedup.core.models import Action

ACTION_HELP_TEXT = (
    "Action applied to every duplicate:\n"
    "  (default)     : dry run, print each duplicate path to stdout\n"
    "  -x            : remove duplicates permanently\n"
    "  -x --trash    : move duplicates to the system trash\n"
)

VERBOSITY_LEVELS = {
    0: "ERROR",
    1: "INFO",
    2: "DEBUG",
}

EPILOG_TEXT = """
Examples:
  Dry run - print duplicates found under the current directory
  %(prog)s

  Scan several directories (possibly on different disks) at once
  %(prog)s ~/Pictures /mnt/backup/Pictures

  Only consider files of at least 1MB and show what is compared
  %(prog)s -m 1M -v ~/Downloads

  Move duplicates to trash, keeping the likely originals
  %(prog)s -x --trash ~/Downloads

  Remove duplicates permanently
  %(prog)s -x ~/Downloads

The file kept in each pair is the likely original: names such as
"photo (1).jpg" or "photo - Copy.jpg" lose to "photo.jpg", then files
without extension, then digits-only names, then the newer file.
Press Ctrl+C once to stop gracefully, twice to exit immediately.
"""


def action_for(execute: bool, trash: bool) -> Action:
    """Map the -x/--trash flags onto an Action."""
    if not execute:
        return Action.DRY_RUN
    return Action.TRASH if trash else Action.REMOVE
