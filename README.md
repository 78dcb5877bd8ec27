# voicebot

Small building blocks for the voice side of a service robot, written in plain
Python with no third-party dependencies.

| Module | What it holds |
| --- | --- |
| `voicebot.vad` | An energy and zero-crossing voice activity detector for 16-bit PCM. |
| `voicebot.jsonvalue` | `Value`, a dynamically typed JSON value. Object members are kept sorted, arrays can be sparse, and values can carry comments. Conversions are strict. |
| `voicebot.jsonwriter` | `FastWriter`, `StyledWriter` and `StyledStreamWriter` for `Value` trees. |
| `voicebot.jsonpath` | `Path`, which addresses nested values with paths such as `data[0].params.sub`. |
| `voicebot.awake` | `is_wake_phrase`, a wake-word check on recognised text. |

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Voice activity detection

`VoiceActivityDetector` takes either raw little-endian 16-bit PCM bytes or a
sequence of integer samples.

It splits the buffer into windows of `n_ms` milliseconds. A window counts as
loud when both of these hold:

- the natural log of its summed squared samples is above the energy threshold;
- it has more zero crossings than the crossing floor.

`detect` returns True when more than three windows are loud. The energy
threshold is `energy_floor + eh`.

`calibrate` works on one background buffer. It records the spread of window
energies in `energy_std`. It then sets `energy_floor` to a fixed 18.02 and
`crossing_floor` to 0.

```python
from voicebot.vad import VoiceActivityDetector, frame_energy, zero_crossings

detector = VoiceActivityDetector(16000, 1, 16)
detector.calibrate(background_pcm, 20)
if detector.detect(speech_pcm, 0.0, 20):
    print("speech")

detector.frames_per_window(20)   # 320 samples at 16 kHz mono
```

## JSON values

```python
from voicebot.jsonvalue import Value, ValueType
from voicebot.jsonwriter import FastWriter, StyledStreamWriter, to_styled_string
from voicebot.jsonpath import Path

doc = Value.from_python({"intent": {"text": "go forward", "slots": [1, 2]}})

print(FastWriter().write(doc), end="")
# {"intent":{"slots":[1,2],"text":"go forward"}}

print(to_styled_string(doc))                       # indented by three spaces
print(Path("intent.slots[1]").resolve(doc).as_int())   # 2
print(Path("intent.%", "text").resolve(doc).as_string())
```

Some points about how `Value` behaves:

- Indexing with `[]` creates missing members, and turns a null value into an
  array or object. `get`, `is_member` and `Path.resolve` only look and never
  create anything.
- Conversions such as `as_int` and `as_uint` raise `JsonError` when the value
  is out of range or of the wrong kind.
- Comments must start with `/`. The styled writers place them by their
  `CommentPlacement`.

`FastWriter` takes three options: `yaml_compatible`, `drop_null_placeholders`
and `omit_ending_line_feed`. `StyledStreamWriter(indentation)` writes to any
text stream.

`Path` handles missing steps in three ways:

- `resolve` returns null for a missing step.
- `resolve_or` returns a default instead.
- `make` creates every step on the way.

## Wake phrase

```python
from voicebot.awake import is_wake_phrase

is_wake_phrase("你好元宝")            # True, the default wake word is "元宝"
is_wake_phrase("hello robot", "robot")  # True
```

## What this package does not do

It does not record from a microphone and does not write WAV files. It does not
talk to a speech recognition or synthesis service. It does not drive the
robot's motion or navigation. It has no command-line program and no service
endpoints. Capturing audio and passing recognised text in is left to the
caller.