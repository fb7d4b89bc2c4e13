# ttkkit

A small toolkit of building blocks for desktop-style Python applications.
It uses only the standard library.

## What is inside

| Module | Purpose |
| --- | --- |
| `ttkkit.cryptohash` | XXTEA cipher for short strings with base64 framing: `encrypt`, `decrypt`, `xxtea_encrypt`, `xxtea_decrypt`, `xxtea_encrypt_bytes`, `xxtea_decrypt_bytes`, `base64_encode`, `base64_decode`, `DecryptionError` |
| `ttkkit.commandline` | Minimal option parser: `CommandLineOption`, `CommandLineParser` |
| `ttkkit.xmldoc` | Reading and writing XML through a DOM tree: `XmlDocument`, `XmlHelper`, `XmlAttr`, `XmlNode` |
| `ttkkit.worker` | Restartable background thread with a cooperative stop flag: `AbstractThread` |
| `ttkkit.anybox` | Container holding one value of an exact type: `Any`, `make_any`, `any_cast` |
| `ttkkit.network` | Network query state and blocking HTTP helpers: `AbstractNetwork`, `NetworkCode`, `fetch_file_size_by_url`, `sync_network_query_for_get`/`_post`/`_put`/`_patch`, `make_user_agent_header`, `make_content_type_header`, `ssl_context` |
| `ttkkit.clickedgroup` | Maps clicks on a list of widgets to the clicked index: `ClickedGroup` |
| `ttkkit.lockedfile` | Advisory read/write locks on a file opened without truncation: `LockedFile`, `LockMode` |
| `ttkkit.localpeer` | Single-instance detection and messaging over a local socket: `LocalPeer`, `qt_checksum` |
| `ttkkit.application` | Single-instance application objects: `CoreApplication`, `Application` |
| `ttkkit.dumper` | Writes a stack dump file when the process gets a fatal signal: `Dumper` |
| `ttkkit.moveresize` | Geometry logic for dragging and border-resizing a frameless window: `MoveResizeTracker`, `size_direction`, `Direction`, `Rect` |
| `ttkkit.slider` | Value logic for a slider that jumps to where it is clicked: `ClickedSlider`, `Orientation` |
| `ttkkit.desktop` | Screen and taskbar geometry: `screen_taskbar`, `screen_geometry`, `bounding_geometry`, `TaskbarInfo` |

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Examples

Encrypting and decrypting a string:

```python
from ttkkit.cryptohash import encrypt, decrypt

ciphertext = encrypt("hello world", "secret")
assert decrypt(ciphertext, "secret") == "hello world"
```

`decrypt` raises `DecryptionError` (a `ValueError`) when the ciphertext does
not carry a valid length trailer. Keys are cut or zero-padded to 16 bytes.

Parsing command-line options:

```python
from ttkkit.commandline import CommandLineOption, CommandLineParser

config = CommandLineOption("-c", "--config", "Path to the configuration file")

parser = CommandLineParser()
parser.add_option(config)          # ValueError if empty or already registered
parser.process(["--config", "settings.xml"])   # defaults to sys.argv[1:]

if parser.is_set(config):
    print(parser.value(config))    # settings.xml
print(parser.help_text())
```

Reading values from an XML document:

```python
from ttkkit.xmldoc import XmlDocument

doc = XmlDocument()
doc.from_string('<root><city value="Paris">capital</city></root>')
print(doc.read_attribute_by_tag_name("city", "value"))   # Paris
print(doc.read_text_by_tag_name("city"))                 # capital
```

Malformed input makes `from_string`, `from_bytes` and `from_file` raise
`ValueError`. To write a file, call `load(path)`, build the tree with
`create_root` and `write_dom_element`, then `save()`.

Allowing only one running instance of an application:

```python
from ttkkit.application import CoreApplication

with CoreApplication("my-app") as app:
    if app.is_running():
        app.send_message("raise", timeout=5.0)   # seconds
    else:
        app.connect(lambda message: print("received", message))
        app.process_messages(timeout=10.0)       # handle one message
```

The first instance to call `is_running()` takes a lock file in the temporary
directory (or the `directory` given) and listens for messages; later
instances see `True` and can send messages, which the first instance reads
one at a time with `process_messages`. `Application` adds an activation
window: any object with a `minimized` attribute and `raise_()` and
`activate()` methods, brought forward by `activate_window()` and, if
requested, on every message.

Writing a dump on a fatal signal:

```python
from ttkkit.dumper import Dumper

dumper = Dumper(directory="/tmp")
dumper.run()   # from the main thread
```

On `SIGSEGV`, `SIGABRT`, `SIGINT`, `SIGTERM` and similar signals the handler
writes the Python stack to `<name>_<version>.<timestamp>.dmp`, then lets the
signal take its default effect. `close()` restores the previous handlers.

## What the package does not do

- It draws no windows. `moveresize`, `slider`, `clickedgroup` and `desktop`
  hold only the geometry and event logic; you feed them mouse positions and
  screen rectangles from whatever GUI toolkit you use, and apply the results.
- `Dumper` writes a Python stack trace, not a native memory dump.
- Messages between instances are not received in the background: the serving
  instance must call `process_messages` (or `LocalPeer.receive_connection`).