# xsubkit

Timed image subtitles in the `xsub` container format.

An `xsub` file has three parts:

1. A fixed 16-byte little-endian header. It holds the magic `xsub`, the
   type tag `01 00 00 00`, the width and height of the reference canvas,
   and the byte length of the entry table.
2. A table of timed subtitle entries.
3. An embedded image, often called the atlas.

Each entry has a start and an end time and a list of placements. A
placement cuts a rectangle out of the image and puts it on the output
canvas. It carries an alignment (`Align` flags), vertical and horizontal
offsets, and fade-in and fade-out durations.

## Installation

```
pip install xsubkit
```

## Reading and writing files

```python
from xsubkit.imagesub import load_imagesub, write_imagesub

sub = load_imagesub("opening.xsub")
print(sub.is_valid(), sub.is_empty(), sub.width, sub.height, sub.aspect_ratio)

with open("copy.xsub", "wb") as stream:
    write_imagesub(sub, stream)
```

- `read_imagesub(stream)` reads from an open binary stream.
- `load_imagesub(path)` opens a file and reads it. It raises
  `ValueError` for an empty path.
- `write_imagesub` writes the header, then the entry table, then the
  image encoded as PNG.

`ImageSub` holds the entries, the image (a Pillow RGBA image), the
reference width and height, and the parsed header. `add(entry)` appends
an entry. `is_valid()` is true when there is an image and at least one
entry.

The low-level pieces of the format live in `xsubkit.format`:

- the records `XsubHeader`, `SubEntry`, `Placement` and `Point`, each
  with a `pack()` method;
- the `Align` flags `LEFT`, `RIGHT`, `TOP`, `BOTTOM`, `CENTER` and
  `MIDDLE`;
- the functions `parse_header`, `parse_point`, `parse_entries` and
  `pack_entries`.

Malformed or truncated input raises `XsubFormatError`, a subclass of
`ValueError`. This covers a bad magic, an unsupported type tag, a short
entry table and an image that cannot be decoded.

## Rendering

`ImageSubPlayer` renders the entries that are active at a given time
into an off-screen RGBA buffer. It scales them to the canvas while
keeping the subtitle's aspect ratio, anchors them by their alignment
flags, and fades them in and out. Each finished frame goes to the
`on_present` callback as `(frame, position, alpha)`.

```python
from xsubkit.player import ImageSubPlayer

def present(frame, position, alpha):
    frame.save("frame.png")

player = ImageSubPlayer(size=(1280, 720), on_present=present)
player.ensure_buffer()      # allocate the back buffer for the current size
player.show()               # global alpha 255
player.load("opening.xsub") # or pass an ImageSub object

player.update(3.5)          # render the frame for t = 3.5 s
```

`update` does nothing until there is a buffer, so call
`ensure_buffer()` after setting the size.

When `load` is given a file that holds nothing to show, it returns
`False` and leaves no subtitle loaded. The following report the player's
state:

- `current()`
- `is_loaded()`
- `is_playing()`
- `last_entry()`: the most recent entry drawn.

Playback:

- `play(start=0.0, as_thread=True)` runs a monotonic clock from `start`
  seconds and clears the canvas when it stops.
- `play_with_clock(get_time, as_thread=True)` asks `get_time()` for the
  time on every frame, for example a video's position.
- Both return the background thread when `as_thread` is true.
- `stop(await_for_last=False)` ends playback. With `True` it first waits
  until no entry is on screen.
- `unload()` drops the subtitle, which also ends playback.

### Default placement overrides

You can set a player-wide default point with `set_default_point`,
`set_default_align`, `set_default_vertical` and
`set_default_horizontal`. It takes the place of each placement's own
point only for the parts switched on:

- `use_default_point(mix_mode=False)` switches on all parts;
  `unuse_default_point()` switches them all off.
- `use_default_align(mix_mode=False)` and `unuse_default_align()` switch
  the alignment.
- `use_default_vertical()` and `unuse_default_vertical()` switch the
  vertical offset.
- `use_default_horizontal()` and `unuse_default_horizontal()` switch the
  horizontal offset.

With `mix_mode` the alignment becomes the union of the entry's flags and
the default flags.

The calculations behind this are in `xsubkit.layout`: `DefaultOverride`,
`scale_factors`, `place` and `fade_alpha`.

## The canvas

`xsubkit.canvas.PlayerCanvas` is the surface the player draws on.

- **Geometry:** `set_rect`, `set_size` and `set_position`.
- **Visibility:** `show`, `hide` and `is_visible` control the global
  alpha.
- **Drawing:** `safe_draw(draw)` calls `draw(buffer, size)` under the
  lock while the canvas is visible.
- **Clearing:** `clear(color)` fills the buffer with a `0xAARRGGBB`
  colour. `unpack_argb` splits such a colour into
  `(alpha, red, green, blue)`.
- **Centring:** `sync_to_parent(window_rect, client_size, is_popup,
  screen_size, caption_height)` centres the canvas over a parent window
  whose geometry you supply.

## Timer

`xsubkit.timer.Timer` is a small monotonic stopwatch:

- `mark()` returns the seconds since the previous mark and starts a new
  interval.
- `peek()` returns the seconds since the last mark without resetting it.

## What this package does not do

It opens no window and draws nothing on screen. Frames reach a display
only through the `on_present` callback you supply. It does not query
window systems either: `sync_to_parent` works only from geometry you
pass in. There is no command-line tool.