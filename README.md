# noffkit

Tools for the NOFF object format: a small executable format that records
where each segment of a program lives in the file and where it is to be
placed in a virtual address space.

The package:

* converts little-endian MIPS COFF executables (linked with no shared text,
  `OMAGIC`) into NOFF files, and
* models the kernel pieces that consume them: loading a NOFF image into an
  address space and translating addresses, system call numbers and error
  codes, semaphores, locks and condition variables, a synchronised list, and
  a FIFO ready-list scheduler.

It uses only the standard library and supports Python 3.10 and later.

## Installing

```
pip install .
```

To run the tests as well:

```
pip install .[test]
pytest
```

## Converting a COFF executable

From the command line:

```
noffkit-convert program.coff program.noff
noffkit-convert --rdata program.coff program.noff
```

The command prints the number of sections and, for each, its name, file
position, memory position and size. It checks the magic numbers of the COFF
file header (`MIPSELMAGIC`) and of the system header (`OMAGIC`), then copies
`.text` and `.data` (and `.rdata` when `--rdata` is given) into the output,
one after another, right behind the NOFF header. `.bss` is recorded only by
its address and size. Empty sections are skipped; any other section name is
an error, as is a second `.bss` that starts exactly where the first ends.
On any error the message goes to standard error, the output file is removed
and the exit status is 1. With fewer than two paths a usage line is printed.

From Python:

```python
from noffkit.convert import convert, convert_file, ConversionError

with open("program.coff", "rb") as f:
    noff_bytes = convert(f.read(), readonly_data=False)

try:
    header = convert_file("program.coff", "program.noff", readonly_data=False)
except ConversionError as err:
    print(f"conversion failed: {err}")
```

`convert` takes and returns bytes. `convert_file` writes the result, returns
the `NoffHeader` it wrote, and removes the output file if conversion fails.
The NOFF header is always written little-endian.

## Reading NOFF and COFF headers

```python
from noffkit.noff import NOFFMAGIC, NoffHeader

header = NoffHeader.unpack(noff_bytes, readonly_data=False)
print(header.magic == NOFFMAGIC)
print(header.code, header.init_data, header.uninit_data)
print(NoffHeader.size(readonly_data=False))   # 40 bytes; 52 with read-only data
```

Each segment is a `Segment` with `virtual_address`, `file_offset` and
`size`. `unpack` also recognises a header written big-endian, by its magic
number. `pack` encodes a header.

`noffkit.coff` offers `FileHeader`, `AoutHeader` and `SectionHeader`, each
with `unpack` and `pack`, and the constants `MIPSELMAGIC`, `OMAGIC` and
`SOMAGIC`. Input that is too short, or a value that cannot be encoded
(such as a section name longer than 8 bytes), raises `CoffError`.

## Loading a program into an address space

```python
from noffkit.addrspace import AddressSpace, AddressSpaceError, ExceptionType

space = AddressSpace(num_phys_pages=128, page_size=128)
memory = bytearray(space.memory_size)
header = space.load(noff_bytes, memory)   # bytes or a file path
registers = space.initial_registers()     # {"pc": 0, "next_pc": 4, "sp": ...}

try:
    paddr = space.translate(0x100, writing=False)
except AddressSpaceError as err:
    print(err.exception)                  # e.g. ExceptionType.ADDRESS_ERROR
```

`load` clears memory, copies code, initialised data and (with
`readonly_data=True`) read-only data to their virtual addresses, and sizes
the space to hold them, the uninitialised data and a `USER_STACK_SIZE`
(1024 byte) stack. A bad magic number, an unreadable file, a program larger
than physical memory or a segment outside memory raises `AddressSpaceError`.

The page table maps each virtual page to the physical page of the same
number. `translate` marks the page used (and dirty when writing) and
reports faults through `AddressSpaceError.exception`: `ADDRESS_ERROR` for an
address outside the space, `READ_ONLY` for a write to a read-only page and
`BUS_ERROR` for a bad physical page. The stack pointer starts 16 bytes below
the top of the space.

## System calls and error codes

`noffkit.syscalls` holds `SyscallCode`, the numbers user programs place in
register 2 (`HALT`, `EXIT`, `CREATE`, `PRINT_INT`, `ADD`, `MSG` and the
rest), `Errno`, the negative error codes returned to user programs, and
`SYS_CONSOLE_INPUT` / `SYS_CONSOLE_OUTPUT`. `sys_add(42, 23)` returns `65`;
sums wrap like a 32-bit signed register.

## Synchronisation and scheduling

* `noffkit.synch`: `Semaphore` (`p`, `v`), `Lock` (`acquire`, `release`,
  `is_held_by_current_thread`, usable in a `with` statement) and Mesa-style
  `Condition` (`wait`, `signal`, `broadcast`). These work with Python
  threads. Releasing a lock, or using a condition, without holding the lock
  raises `RuntimeError`.
* `noffkit.synchlist`: `SynchList`, whose `remove_front` waits until an item
  has been appended; `append`, `apply` and `len()` complete it.
* `noffkit.scheduler`: `ThreadStatus`, `ThreadRecord` and a FIFO
  `Scheduler` with `ready_to_run`, `find_next_to_run` (returns `None` when
  nothing is ready), `run` (switches `current` to the next thread and, when
  `finishing`, returns the finished thread marked `ZOMBIE`),
  `check_to_be_destroyed` and `describe` for the ready-list contents.

## What it does not do

The package does not simulate a MIPS processor, so it cannot execute the
programs it converts and loads: there is no machine, no console or disk
device, no file system behind `CREATE`, and no command that boots a kernel.
`SyscallCode` only names the calls; of their kernel work, only `sys_add` is
provided. The scheduler keeps records of threads and does not switch real
execution contexts.