#!/usr/bin/env python3
"""
Random fuzzer for the character reference decoder.
Generates malformed references and invalid UTF-8 and checks that decoding
never raises, always returns text and leaves ampersand-free input untouched.
"""

import argparse
import random
import string
import sys
import time
import traceback

from turbounescape import ENTITIES, Context, decode

NAMES = [key.decode("ascii") for key in ENTITIES]

REFERENCES = [
    "&amp;", "&lt;", "&gt;", "&quot;", "&apos;", "&nbsp;",
    "&", "&amp", "&ampamp;", "&am", "&#", "&#x", "&#123", "&#x1f;",
    "&#xdeadbeef;", "&#99999999;", "&#-1;", "&#x;", "&unknown;",
    "&AMP;", "&AMP", "&LT", "&GT", "&;", "&=", "&times=", "&timesX",
    "&#0;", "&#x0;", "&#x0D;", "&#13;",
    "&#128;", "&#x80;", "&#159;", "&#x9F;",
    "&#xD800;", "&#xDFFF;",
    "&#x10FFFF;", "&#x110000;",
    "&NotExists;", "&notin;", "&notinva;", "&notit;",
    "&CounterClockwiseContourIntegral;",
]

SPECIAL_BYTES = [
    b"\x00", b"\x7f", b"\x80", b"\xff", b"\xc3", b"\xe2\x82", b"\xed\xa0\x80",
    b"\xef\xbf\xbd", b";", b"=", b"#", b"x", b"X",
]


def random_string(min_len=0, max_len=20):
    """Generate random ASCII alphanumeric string."""
    length = random.randint(min_len, max_len)
    return "".join(random.choices(string.ascii_letters + string.digits, k=length))


def fuzz_named():
    strategies = [
        lambda: random.choice(NAMES),
        lambda: random.choice(NAMES) + random_string(1, 5),
        lambda: random.choice(NAMES).rstrip(";") + random.choice(["=", ";", "#", ""]),
        lambda: "&" + random_string(0, 40) + random.choice([";", ""]),
        lambda: random.choice(NAMES)[: random.randint(1, 10)],
    ]
    return random.choice(strategies)().encode("ascii")


def fuzz_numeric():
    strategies = [
        lambda: "&#" + str(random.randint(0, 0x11FFFF)),
        lambda: "&#x" + format(random.randint(0, 0x11FFFF), random.choice(["x", "X"])),
        lambda: "&#x" + "".join(random.choices(string.hexdigits, k=random.randint(0, 60))),
        lambda: "&#" + "".join(random.choices(string.digits, k=random.randint(0, 60))),
        lambda: "&#" + random.choice(["x", "X", ""]) + random_string(0, 5),
    ]
    return (random.choice(strategies)() + random.choice([";", "", "=", "&"])).encode("ascii")


def fuzz_text():
    return random_string(0, 30).encode("ascii")


def generate_fuzzed_input():
    parts = []
    for _ in range(random.randint(1, 20)):
        element_type = random.choice([
            fuzz_named, fuzz_named, fuzz_numeric, fuzz_numeric, fuzz_text,
            lambda: random.choice(REFERENCES).encode("ascii"),
            lambda: random.choice(SPECIAL_BYTES),
        ])
        parts.append(element_type())
    return b"".join(parts)


def check(data):
    """Decode data in both contexts and return a description of any violation."""
    for context in (Context.GENERAL, Context.ATTRIBUTE):
        errors = []
        result = decode(data, context, errors=errors)
        if not isinstance(result, str):
            return f"{context.name}: returned {type(result).__name__}"
        result.encode("utf-8")
        if decode(data, context) != result:
            return f"{context.name}: error collection changed the output"
        if b"&" not in data and result != data.decode("utf-8", "replace"):
            return f"{context.name}: input without '&' was modified"
    return None


def run_fuzzer(num_tests, seed=None, verbose=False, save_failures=False):
    """Run the fuzzer against the decoder."""
    if seed is not None:
        random.seed(seed)

    crashes = []
    violations = []
    hangs = []
    successes = 0

    print(f"Fuzzing turbounescape with {num_tests} test cases...")
    start_time = time.time()

    for i in range(num_tests):
        data = generate_fuzzed_input()

        if verbose and i % 1000 == 0:
            print(f"  Test {i}/{num_tests}...")

        try:
            start = time.perf_counter()
            problem = check(data)
            elapsed = time.perf_counter() - start
        except Exception as e:
            crashes.append({
                "test_num": i,
                "data": data,
                "error": str(e),
                "traceback": traceback.format_exc(),
            })
            if verbose:
                print(f"  CRASH: Test {i}: {e}")
            continue

        if problem is not None:
            violations.append({"test_num": i, "data": data, "error": problem})
            if verbose:
                print(f"  VIOLATION: Test {i}: {problem}")
        elif elapsed > 1.0:
            hangs.append({"test_num": i, "data": data, "time": elapsed})
            if verbose:
                print(f"  HANG: Test {i} took {elapsed:.2f}s")
        else:
            successes += 1

    elapsed_total = time.time() - start_time

    print(f"\n{'='*60}")
    print("FUZZING RESULTS: turbounescape")
    print(f"{'='*60}")
    print(f"Total tests:    {num_tests}")
    print(f"Successes:      {successes}")
    print(f"Crashes:        {len(crashes)}")
    print(f"Violations:     {len(violations)}")
    print(f"Hangs (>1s):    {len(hangs)}")
    print(f"Total time:     {elapsed_total:.2f}s")
    print(f"Tests/second:   {num_tests/elapsed_total:.1f}")

    for title, failures in (("CRASH", crashes), ("VIOLATION", violations)):
        if not failures:
            continue
        print(f"\n{'='*60}")
        print(f"{title} DETAILS:")
        print(f"{'='*60}")
        for failure in failures[:10]:
            print(f"\nTest #{failure['test_num']}:")
            print(f"  Input: {failure['data'][:200]!r}")
            print(f"  Error: {failure['error']}")
        if len(failures) > 10:
            print(f"\n... and {len(failures) - 10} more")

    if save_failures and (crashes or violations or hangs):
        filename = f"fuzz_failures_{int(time.time())}.txt"
        with open(filename, "w") as f:
            f.write(f"Seed: {seed}\n\n")
            for crash in crashes:
                f.write(f"=== CRASH #{crash['test_num']} ===\n")
                f.write(f"Input: {crash['data']!r}\n")
                f.write(f"Traceback:\n{crash['traceback']}\n\n")
            for violation in violations:
                f.write(f"=== VIOLATION #{violation['test_num']} ===\n")
                f.write(f"Input: {violation['data']!r}\n")
                f.write(f"Error: {violation['error']}\n\n")
            for hang in hangs:
                f.write(f"=== HANG #{hang['test_num']} ({hang['time']:.2f}s) ===\n")
                f.write(f"Input: {hang['data']!r}\n\n")
        print(f"\nFailures saved to {filename}")

    return not (crashes or violations or hangs)


def main():
    parser = argparse.ArgumentParser(description="Fuzz the character reference decoder with malformed input")
    parser.add_argument(
        "--num-tests", "-n",
        type=int,
        default=10000,
        help="Number of test cases to generate (default: 10000)",
    )
    parser.add_argument(
        "--seed", "-s",
        type=int,
        default=None,
        help="Random seed for reproducibility",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "--save-failures",
        action="store_true",
        help="Save failures to a file",
    )
    parser.add_argument(
        "--sample",
        type=int,
        metavar="N",
        help="Just print N sample fuzzed inputs (no decoding)",
    )

    args = parser.parse_args()

    if args.sample:
        if args.seed:
            random.seed(args.seed)
        for i in range(args.sample):
            print(f"=== Sample {i+1} ===")
            print(repr(generate_fuzzed_input()))
        return

    success = run_fuzzer(
        args.num_tests,
        seed=args.seed,
        verbose=args.verbose,
        save_failures=args.save_failures,
    )

    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
