import logging
import sys

from domevent.lib.args import ArgsNamespace, parse_args
from domevent.lib.event import Event
from domevent.lib.logger import configure_logger
from domevent.lib.tracer import DispatchTracer
from domevent.lib.tree_config import TreeConfig, TreeConfigError
from domevent.version import __version__

logger = logging.getLogger(__name__)


def make_action(prevent: bool, stop: bool, stop_immediate: bool):
    """Build the callback a traced target runs after recording each call."""

    def action(event: Event) -> None:
        if prevent:
            event.prevent_default()
        if stop_immediate:
            event.stop_immediate_propagation()
        elif stop:
            event.stop_propagation()

    return action


def run_trace(args: ArgsNamespace) -> int:
    """Build the configured chain, dispatch one event and print the trace. Returns an exit code."""
    try:
        tree = TreeConfig.from_file(args.config)
    except TreeConfigError as e:
        logger.error(str(e))
        return 2

    if not args.event:
        logger.error("--event: event type must not be empty")
        return 2

    target_name = args.target or tree.deepest()
    for option, name in (
        ("--target", target_name),
        ("--stop-at", args.stop_at),
        ("--stop-immediate-at", args.stop_immediate_at),
        ("--prevent-at", args.prevent_at),
    ):
        if name is not None and name not in tree.declared:
            logger.error(f"{option}: unknown target '{name}'")
            return 2

    tracer = DispatchTracer()
    for name in tree.declared:
        prevent = name == args.prevent_at
        stop = name == args.stop_at
        stop_immediate = name == args.stop_immediate_at
        if prevent or stop or stop_immediate:
            tracer.set_action(name, make_action(prevent, stop, stop_immediate))

    targets = tree.build(tracer)
    event = Event(args.event, bubbles=not args.no_bubbles, cancelable=args.cancelable)
    result = targets[target_name].dispatch_event(event)

    print(f"domevent {__version__}: dispatched '{args.event}' on '{target_name}'")
    if tracer.entries:
        print(tracer.format())
    else:
        print("(no listeners or handlers ran)")
    print(f"default prevented: {event.default_prevented}")
    print(f"dispatch result: {result}")
    return 0


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    configure_logger(log_level=args.log_level, log_dir=args.log_dir)
    sys.exit(run_trace(args))


if __name__ == "__main__":
    main()
