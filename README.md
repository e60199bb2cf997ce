# pallet_kitchen

Small, self-contained runtime modules kept entirely in memory. Each module
holds its own storage and checks the caller's origin. It raises
`DispatchError` when a call is rejected and deposits events into a shared
`System`.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## The basics

`pallet_kitchen.system` provides the shared pieces:

- `System` holds `block_number` and the list `events`. It has
  `set_block_number(n)`, `deposit_event(event)`, `has_event(event)` and
  `random_seed()`. The last returns a 32-byte BLAKE2b digest of the block
  number, so it is deterministic and weak.
- `signed(account)` builds a signed `Origin` and `root()` builds an unsigned
  one. `ensure_signed(origin)` returns the signing account, or raises
  `BadOrigin`, which is a subclass of `DispatchError`.
- `checked_add(a, b, bits)` and `checked_sub(a, b)` return `None` on
  overflow or underflow.

Events are frozen dataclasses, so they compare by value:

```python
from pallet_kitchen.system import System, signed, DispatchError
from pallet_kitchen.adding_machine import AddingMachine, Added

system = System()
machine = AddingMachine(system)

machine.add(signed(1), 6, 9)
assert system.has_event(Added(6, 9, 15))

try:
    machine.add(signed(3), 2**32 - 1, 1)
except DispatchError as err:
    print(err)  # Addition overflowed
```

## Modules

Storage and events:

- `hello_substrate.HelloSubstrate`: `set_value` records `last_value` and a per-account value, which `user_value(account)` reads back.
- `adding_machine.AddingMachine`: `add` performs overflow-checked 32-bit addition and emits `Added`.
- `simple_event.SimpleEvent` emits its input as an event.
- `generic_event.GenericEvent` emits its input as an event together with the caller.
- `single_value.SingleValue`: `set_value`/`get_value` and `set_account`/`get_account`. A getter raises if its value has never been set.
- `simple_map.SimpleMap`: per-account 32-bit entries, with `set_single_entry`, `get_single_entry`, `take_single_entry`, `increase_single_entry` and `compare_and_swap_single_entry`.
- `check_membership.CheckMembership`: `init_ownership`, `transfer_ownership`, `add_member`, `remove_member` and `is_member`.
- `basic_token.BasicToken`: the first caller of `init` receives the whole supply of 21,000,000. `transfer` moves tokens between accounts.
- `last_caller.LastCaller(system, instance="DefaultInstance")`: `call` remembers the last caller. Each instance keeps its own caller.
- `double_map.DoubleMap`: members join a global set and then a scored group. `remove_group` drops a whole group's scores at once.
- `linked_map.LinkedMap`: an indexed map with a counter, plus a linked map. It removes members in three ways: unbounded, swap-and-pop (`remove_member_bounded`) and linked.
- `constant_config.ConstantConfig(system, max_addend, clear_frequency)`: `add_value` is capped at `max_addend`. `on_finalize(n)` clears the value when `n` is a multiple of `clear_frequency`.
- `gen_random.GenRandom`: `use_weak_entropy` derives a 64-bit value from the system seed and a nonce. The value is predictable, so do not use it for security.

Scheduling:

- `execution_schedule.ExecutionSchedule(system, signal_quota=100, execution_frequency=5, task_limit=10)`:
  - Council members added with `add_member` can `schedule_task` and `signal_priority`.
  - `on_initialize(n)` starts a new era and refreshes every member's signal quota when `(n - 1)` is a multiple of the frequency.
  - `on_finalize(n)` runs `execute_tasks` on multiples of the frequency. It executes tasks in identifier order within the period's allowance. A task whose score exceeds the remaining allowance stays pending.

Currency:

- `currency.Balances(system=None, existential_deposit=0)` is an in-memory currency:
  - Balances are free and reserved. Withdrawal locks are tagged with `WithdrawReason` flags and stay active while the block number is below their `until`.
  - Deposits and withdrawals return `PositiveImbalance` and `NegativeImbalance` values.
  - An account whose total falls to zero, or below the existential deposit, is removed.
- `reservable_currency.ReservableCurrency(system, currency)`: `lock_funds`, `unlock_funds`, `transfer_funds` and `unreserve_and_transfer`.
- `lockable_currency.LockableCurrency(system, currency, lock_period)`: `lock_capital`, `extend_lock` and `unlock_all`, all under the lock id `b"example "`.
- `currency_imbalances.CurrencyImbalances(system, currency, on_reward=None, on_slash=None)`: `slash_funds` and `reward_funds`. Each passes the resulting imbalance to the given handler. Any signed origin may call these.

```python
from pallet_kitchen.system import System, signed
from pallet_kitchen.currency import Balances
from pallet_kitchen.reservable_currency import ReservableCurrency

system = System()
balances = Balances(system)
balances.deposit_creating(1, 100)

ReservableCurrency(system, balances).lock_funds(signed(1), 30)
assert balances.free_balance(1) == 70
assert balances.reserved_balance(1) == 30
```

Child tries and crowdfunding:

- `child_trie.ChildStorage` stores separate key-value tries addressed by `id_from_index(tag, index)`. A whole trie can be dropped with `kill_storage`.
- `child_trie.ChildTrie` uses that storage to map accounts to values per object index. Account ids are encoded by `encode_account`.
- `crowdfund.Crowdfund(system, currency, submission_deposit, min_contribution, retirement_period, orphaned_funds=None)`:
  - `create` opens a fund. It takes the deposit and returns the fund index.
  - `contribute` moves funds into the fund's pot account (`fund_account_id`). Contributions are tracked in a child trie.
  - `withdraw` returns a contributor's balance after the fund ends.
  - `dissolve`, once the retirement period has passed, refunds the owner's deposit and passes what is left to `orphaned_funds`.

## What this package does not do

Everything lives in Python objects for the lifetime of the process:

- There is no persistent storage.
- There is no block production, no transaction pool, no fees or weights, and no networking.
- Nothing runs the block hooks for you. Hooks such as `on_initialize` and `on_finalize` are plain methods that you call yourself while advancing `System.set_block_number`.
- The package provides no command-line program.