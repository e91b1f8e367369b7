# corokit

Small building blocks for coroutine code on top of `asyncio`. The package has
no third-party dependencies.

## What is in it

- `corokit.event`
  - `Event(initially_set=False)` – a thread-safe signal that any number of
    coroutines can `await`. `set(policy=ResumeOrderPolicy.LIFO, executor=None)`
    resumes every waiter, last-in first by default or first-in first with
    `ResumeOrderPolicy.FIFO`. If `executor` is given (any object with a
    `submit(fn, *args)` method, such as a `concurrent.futures` executor), each
    resumption is submitted to it. Waiters on other threads' event loops are
    woken through their own loop. Setting an already set event does nothing;
    `reset()` returns it to the unset state; `is_set()` reports the state.
    Awaiting a set event completes at once.
- `corokit.latch`
  - `Latch(count)` – awaited until `count_down(n=1, executor=None)` has
    brought the count to zero. A latch created with a count of zero or less
    starts ready. `is_ready()` and `remaining()` (never below zero) report
    progress.
- `corokit.sync_wait`
  - `sync_wait(awaitable)` – runs an awaitable to completion from synchronous
    code and returns its result, or raises its exception. Passing something
    that is not awaitable raises `TypeError`. If an event loop is already
    running in the calling thread, the awaitable is driven on a helper thread
    while the caller blocks.
- `corokit.task_container`
  - `TaskContainer(executor, options=None)` – starts fire-and-forget
    coroutines on the given `asyncio` event loop and keeps them alive until
    they finish. `executor` must be an event loop (`None` raises
    `ValueError`, anything else `TypeError`).
  - `start(user_task, cleanup=GarbageCollect.YES)` stores and starts a task,
    collecting finished ones first unless `GarbageCollect.NO` is given.
  - `garbage_collect()` frees the slots of finished tasks and returns how many
    were freed; `delete_task_size()`, `delete_tasks_empty()`, `size()`,
    `empty()` and `capacity()` report on the container.
  - `await garbage_collect_and_yield_until_empty()` waits until every task has
    finished.
  - Exceptions raised by a user task are printed to stderr and never
    propagate.
  - `TaskContainerOptions(reserve_size=8, growth_factor=2.0)` sets the initial
    slot count and how the slot count grows when full; a negative size or a
    non-positive factor raises `ValueError`.
- `corokit.net.tcp_client`
  - `TcpClient(options=None, sock=None)` – a TCP client whose socket is always
    non-blocking. `TcpClientOptions(address="127.0.0.1", port=8080)` says where
    to connect. A socket that is already connected may be passed as `sock`.
  - `await connect(timeout=0.0)` returns a `ConnectStatus`, which is cached
    for later calls. An address that is not an IP address gives
    `INVALID_IP_ADDRESS`.
  - `await poll(op=PollOp.READ, timeout=0.0)` waits for readiness and returns
    a `PollStatus` (`EVENT`, `TIMEOUT`, `ERROR`, `CLOSED`). Timeouts are in
    seconds; zero waits indefinitely.
  - `recv(buffer)` fills a `bytearray` or `memoryview` and returns
    `(RecvStatus, view of the bytes received)`.
  - `send(data)` returns `(SendStatus, view of the bytes not yet sent)`.
  - `socket()` returns the underlying socket. `close()` closes it, and the
    client is also a context manager.
- `corokit.net.status`
  - `ConnectStatus`, `RecvStatus`, `SendStatus` and `SslHandshakeStatus`.
  - Receive and send errors carry their `errno` value.
  - `to_string(status)` gives the lower-case member name and raises
    `ValueError` for anything that is not one of these statuses.

## Installing

```
pip install corokit
```

## Example

```python
import asyncio

from corokit.event import Event
from corokit.sync_wait import sync_wait


async def main():
    e = Event()

    async def waiter(i):
        await e
        return i

    tasks = [asyncio.ensure_future(waiter(i)) for i in range(3)]
    await asyncio.sleep(0)
    e.set()
    return await asyncio.gather(*tasks)


print(sync_wait(main()))  # [0, 1, 2]
```

## Demos

`corokit.demos` holds four short walkthroughs: `event_demo()`,
`generator_demo(count_to=100)`, `task_demo()` and `latch_demo(num_tasks=5)`.
Each one returns what it produced. They can also be run from the command line:

```
corokit-demo                      # run all of them
corokit-demo generator --count-to 10
corokit-demo latch --tasks 3
```

The first argument is one of `event`, `generator`, `task`, `latch` or `all`.

## What it does not do

- There is no TCP server and no way to accept connections. A connected socket
  obtained elsewhere can be wrapped with `TcpClient(sock=...)`.
- There is no hostname resolution. `TcpClient` connects only to literal IPv4
  or IPv6 addresses.
- There is no TLS support. `SslHandshakeStatus` and the `SSL_ERROR` members
  exist as status values only.
- There is no scheduler or thread pool of its own. Work runs on `asyncio`
  event loops, and `Event.set` and `Latch.count_down` can hand resumptions to
  an executor you supply.

## Tests

```
pip install "corokit[test]"
pytest
```