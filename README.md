# lounge

Building blocks for a keyboard-driven application launcher, in the spirit of
tools like Alfred and Raycast. The package has no user interface of its own.
It holds the state and rules that such a launcher runs on:

- `lounge.paths`: per-user cache, config and data directories (`Paths`,
  `paths()`).
- `lounge.db`: a small SQLite-backed key-value store of JSON values, with
  named document collections (`Db`, `Collection`, `db()`).
- `lounge.date`: `format_date` renders a timestamp as "Today, …",
  "Yesterday, …" or "DD. Mon YYYY, …".
- `lounge.theme`: the four Catppuccin flavours as built-in themes, user themes
  read from TOML files in `<config>/themes`, and `select_theme` to pick the
  configured theme for a light or dark appearance.
- `lounge.apps`: discovery of installed applications from freedesktop
  `.desktop` files (`get_application_folders`, `get_application_files`,
  `get_application_data`, `ApplicationDesktopFile`).
- `lounge.query`: keystrokes (`Keystroke.parse`) and a text input model
  (`TextView`) with selection, clipboard, word ranges and events.
- `lounge.hotkey`: conversion between keystrokes and hotkey strings,
  hotkey validation, and storage of hotkeys per command (`HotkeyStore`,
  `HotkeyManager`).
- `lounge.shortcuts`: `Shortcut`, `Action`, `Dropdown` and `Toast`.
- `lounge.actions`: the action bar of a view (`Actions`) and the stack of
  views (`StateModel`, `StateItem`).
- `lounge.loader`: tracking of running work (`Loader`, `LoaderState`) and the
  geometry and fade of the loading bar.

## Installation

```
pip install .
```

## Examples

```python
from datetime import datetime
from lounge.date import format_date

format_date(datetime(2024, 3, 1, 9, 30), datetime(2024, 3, 1, 12, 0))
# 'Today, 09:30:00'
```

```python
from lounge.theme import Appearance, ThemeSettings, builtin_themes, select_theme

select_theme(Appearance.DARK, ThemeSettings(), builtin_themes()).name
# 'Catppuccin Mocha'
```

```python
from lounge.query import Keystroke
from lounge.hotkey import keystroke_to_hotkey, validate_hotkey

hotkey = keystroke_to_hotkey(Keystroke.parse("ctrl-alt-space"))
# 'alt+control+space'
validate_hotkey(hotkey)
```

```python
from lounge.shortcuts import Shortcut

Shortcut.new("k", system="darwin").cmd().symbols()
# ['⌘', 'K']
```

Without the `db`, `settings` or `themes` arguments, `select_theme` and
`HotkeyStore` use the shared store in the user's data directory.

## What it does not do

- It draws nothing: there are no windows, list views or rendering.
- It does not register hotkeys with the operating system; `HotkeyManager`
  only maps parsed hotkeys to commands.
- It has no fuzzy matching or ranking of list items.
- It has no command-line program and no socket for controlling a running
  launcher.
- It finds applications only from freedesktop `.desktop` files;
  `get_frontmost_application_data` always returns `None`.

## Tests

```
pip install .[test]
pytest
```