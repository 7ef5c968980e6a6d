"""Media player -- states, guards and queued actions.

Demonstrates:
- Registering states from descriptors
- Listening to machine-wide change notifications
- Vetoing a transition with cancel() from an enter handler
- Actions submitted from a handler being queued until the move commits

Run: python -m examples.player
"""

from machina import Machine, State, StateConfig, TransitionConfig


def main() -> None:
    print("=== Media Player ===\n")

    machine = Machine()
    machine.register_states([
        StateConfig("idle", (TransitionConfig("play", "running"),)),
        StateConfig("running", (
            TransitionConfig("pause", "paused"),
            TransitionConfig("stop", "idle"),
        )),
        StateConfig("paused", (TransitionConfig("play", "running"),)),
    ])

    def report(state: State, data, action) -> None:
        print(f"  {action or 'start'!s:>6} -> {state.name}")

    machine.on_change.add(report)

    # No pausing until something has actually played.
    tracks = {"played": 0}

    def guard_pause(state: State, data, action) -> None:
        if tracks["played"] == 0:
            print("  pause vetoed: nothing played yet")
            machine.cancel()

    machine.get_state("paused").on_enter.add(guard_pause)

    # Stopping immediately rewinds and plays again, via the queue.
    def replay(state: State, data, action) -> None:
        if action == "stop":
            machine.action("play", {"rewound": True})

    machine.get_state("running").on_exit.add(replay)

    machine.start()
    machine.action("play")
    machine.action("pause")
    tracks["played"] += 1
    machine.action("pause")
    machine.action("play")
    machine.action("stop")

    print(f"\nHistory: {' -> '.join(machine.history)}")
    print(f"Now: {machine.current_state.name}")


if __name__ == "__main__":
    main()
