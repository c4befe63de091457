"""
Basic usage examples for seqflow.

This demonstrates lazy views, producers, stateful mapping and the eager
containers.
"""

from seqflow import (
    Vec,
    count_from,
    flatten,
    nested,
    producer,
    seq,
    stateful_map,
)


def example_lazy_views():
    """Example: Chaining lazy views."""
    print("=== Lazy Views Example ===")

    # Nothing is computed until collect() pulls the chain
    squares = seq(range(1_000_000)).map(lambda x: x * x)
    print(f"First five squares: {squares.take(5).collect()}")

    # Short-circuiting stops pulling as soon as the answer is known
    first_big = squares.filter(lambda x: x > 10_000).first()
    print(f"First square above 10,000: {first_big}")

    # Infinite sources are fine as long as something bounds them
    evens = count_from(0, 2).until(lambda x: x > 20).collect()
    print(f"Even numbers up to 20: {evens}")


def example_producers():
    """Example: Producers written as plain generator functions."""
    print("\n=== Producer Example ===")

    @producer
    def countdown(n):
        yield "ready"
        while n > 0:
            yield n
            n -= 1
        yield "liftoff"

    print(f"Countdown: {list(countdown(3))}")

    tree = nested([1, [2, [3, 4], 5]])
    print(f"Flattened tree: {flatten(tree).collect()}")


def example_stateful_map():
    """Example: Threading explicit state through a map."""
    print("\n=== Stateful Map Example ===")

    def running_sum(total, x):
        total += x
        return total, total

    odds = [1, 3, 5, 7, 9, 11, 13]
    sums = stateful_map(running_sum, 0, odds).collect()
    print(f"Running sums of odd numbers: {sums}")

    # State can be any value, here the last two Fibonacci numbers
    def fib_step(pair, _):
        a, b = pair
        return (b, a + b), a

    fib = count_from().stateful_map(fib_step, (0, 1))
    print(f"Fibonacci: {fib.take(10).collect()}")


def example_eager():
    """Example: Eager containers."""
    print("\n=== Eager Example ===")

    data = Vec(range(10))
    print(f"Eager map/filter: {data.filter(lambda x: x % 3 == 0).map(str)}")
    print(f"Reduce: {data.reduce(lambda acc, x: acc + x, 0)}")

    # Gathering owns its storage: later changes to the source don't show up
    source = [1, 2, 3]
    doubled = seq(source).map(lambda x: x * 2).gather(Vec)
    source.append(4)
    print(f"Gathered before the append: {doubled}")


def main():
    """Run all examples."""
    print("seqflow - lazy sequences for Python\n")

    example_lazy_views()
    example_producers()
    example_stateful_map()
    example_eager()

    print("\n=== All Examples Complete ===")


if __name__ == "__main__":
    main()
