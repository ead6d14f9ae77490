#!/usr/bin/env python3
"""
Random fuzzer for the CompactHTML minimizer.
Generates malformed HTML and checks that minimize() never crashes or hangs.
"""

import argparse
import random
import string
import sys
import time
import traceback

from compacthtml import UnsupportedDoctypeError, minimize

TAGS = [
    "div", "span", "p", "a", "b", "i", "ul", "ol", "li", "table", "tr", "td",
    "h1", "h2", "h3", "h4", "h5", "h6", "h10", "html", "head", "body", "title",
    "svg", "math", "g", "section", "article", "#text", "#document", "!DOCTYPE",
]
VOID_TAGS = ["area", "base", "br", "col", "embed", "hr", "img", "input", "link", "meta", "param", "source", "track", "wbr"]
VERBATIM_TAGS = ["script", "style", "pre", "code", "textarea", "plaintext"]

ATTRIBUTES = ["id", "class", "style", "href", "src", "alt", "title", "data-x", "disabled", "hidden"]

SPECIAL_CHARS = [
    "\x00", "\x0b", "\x0c", "\x7f",
    "\ufffd",
    "\u00a0",
    "\u2028",
    "\ufeff",
    "<", ">", "/", "=", '"', "'", "!", "?", "[", "]", "-",
]


def random_string(min_len=0, max_len=20):
    """Generate random ASCII string."""
    length = random.randint(min_len, max_len)
    return "".join(random.choices(string.ascii_letters + string.digits, k=length))


def random_whitespace():
    ws = [" ", "\t", "\n", "\r", "\f", "\x00", ""]
    return "".join(random.choices(ws, k=random.randint(0, 5)))


def fuzz_tag_name():
    strategies = [
        lambda: random.choice(TAGS),
        lambda: random.choice(VOID_TAGS),
        lambda: random.choice(VOID_TAGS) + "/",
        lambda: random.choice(TAGS).upper(),
        lambda: random_string(1, 10),
        lambda: "",
        lambda: random.choice(string.digits) + random_string(0, 4),
        lambda: "?" + random_string(0, 6),
        lambda: random.choice(TAGS) + "/",
        lambda: random.choice(SPECIAL_CHARS) + random.choice(TAGS),
    ]
    return random.choice(strategies)()


def fuzz_attribute():
    name = random.choice([random.choice(ATTRIBUTES), random_string(1, 8), "", "=", '"', "/"])
    value = random.choice([random_string(0, 30), "", "a b", "x>y", random.choice(SPECIAL_CHARS) * 3])
    quote_start, quote_end = random.choice(
        [
            ('="', '"'),
            ("='", "'"),
            ("=", ""),
            (" = ", ""),
            ("", ""),
            ('="', ""),  # Unclosed quote
            ("==", ""),
        ],
    )
    return f"{name}{quote_start}{value}{quote_end}"


def fuzz_open_tag():
    attrs = " ".join(fuzz_attribute() for _ in range(random.randint(0, 4)))
    closing = random.choice([">", "/>", " >", "/ >", "", ">>", "\x00>"])
    opening = random.choice(["<", "< ", "<\n", "<<"]) if random.random() < 0.2 else "<"
    return f"{opening}{fuzz_tag_name()}{random_whitespace()}{attrs}{random_whitespace()}{closing}"


def fuzz_close_tag():
    tag = fuzz_tag_name()
    variants = [
        f"</{tag}>",
        f"</ {tag}>",
        f"</{tag} >",
        f"</{tag}",  # Unclosed
        f"</{tag}/>",
        "</>",
        f"</{tag} {fuzz_attribute()}>",
    ]
    return random.choice(variants)


def fuzz_comment():
    content = random_string(0, 30)
    variants = [
        f"<!--{content}-->",
        f"<!--{content}--!>",
        f"<!--{content}",
        f"<!---{content}--->",
        "<!---->",
        "<!-->",
        "<!--->",
        "<!--!>",
        f"<!-- <!-- {content} --> -->",
        f"<!{content}>",  # Bogus comment
        f"<!{content}",
    ]
    return random.choice(variants)


def fuzz_text():
    parts = [random_string(0, 20), random_whitespace(), random.choice(SPECIAL_CHARS)]
    random.shuffle(parts)
    return "".join(parts)


def fuzz_verbatim():
    tag = random.choice(VERBATIM_TAGS)
    content = random.choice([random_string(0, 30), "<div>  x  </div>", "</" + tag, "a < b && c > d"])
    closing = random.choice([f"</{tag}>", f"</{tag.upper()}>", "", f"</{tag} >"])
    return f"<{tag}>{content}{closing}"


def fuzz_cdata():
    content = random_string(0, 20)
    host = random.choice(["", "svg", "math", "div"])
    cdata = random.choice([f"<![CDATA[{content}]]>", f"<![CDATA[{content}", f"<![CDATA[{content}]>"])
    if host:
        return f"<{host}>{cdata}</{host}>"
    return cdata


def fuzz_headings():
    levels = [random.randint(0, 9) for _ in range(3)]
    opens = "".join(f"<h{level}>" for level in levels[:2])
    return f"{opens}{random_string(1, 5)}</h{levels[2]}>"


def fuzz_doctype():
    variants = [
        "<!DOCTYPE html>",
        "<!DOCTYPE  html >",
        "<!doctype html>",
        "<!DOCTYPE html/>",
    ]
    return random.choice(variants)


def fuzz_deeply_nested():
    depth = random.randint(50, 2000)
    tag = random.choice(["div", "span", "b"])
    return f"<{tag}>" * depth + random_string(1, 5)


def generate_fuzzed_html():
    """Generate a complete fuzzed HTML document."""
    parts = []
    if random.random() < 0.3:
        parts.append(fuzz_doctype())

    for _ in range(random.randint(1, 20)):
        element_type = random.choices(
            [
                fuzz_open_tag,
                fuzz_close_tag,
                fuzz_comment,
                fuzz_text,
                fuzz_verbatim,
                fuzz_cdata,
                fuzz_headings,
                fuzz_deeply_nested,
            ],
            weights=[25, 15, 10, 20, 8, 5, 5, 1],
        )[0]
        parts.append(element_type())

    return "".join(parts)


def run_fuzzer(num_tests, seed=None, verbose=False, save_failures=False):
    if seed is not None:
        random.seed(seed)

    crashes = []
    hangs = []
    rejected = 0
    successes = 0

    print(f"Fuzzing minimize() with {num_tests} test cases...")
    start_time = time.time()

    for i in range(num_tests):
        html = generate_fuzzed_html()

        if verbose and i % 100 == 0:
            print(f"  Test {i}/{num_tests}...")

        try:
            start = time.perf_counter()
            minimize(html, indent=random.choice([0, 2]), newline=random.random() < 0.5)
            elapsed = time.perf_counter() - start
        except UnsupportedDoctypeError:
            rejected += 1
            continue
        except Exception as e:
            crashes.append(
                {
                    "test_num": i,
                    "html": html,
                    "error": str(e),
                    "traceback": traceback.format_exc(),
                },
            )
            if verbose:
                print(f"  CRASH: Test {i}: {e}")
            continue

        if elapsed > 5.0:
            hangs.append({"test_num": i, "html": html, "time": elapsed})
            if verbose:
                print(f"  HANG: Test {i} took {elapsed:.2f}s")
        else:
            successes += 1

    elapsed_total = time.time() - start_time

    print(f"\n{'=' * 60}")
    print("FUZZING RESULTS: compacthtml")
    print(f"{'=' * 60}")
    print(f"Total tests:    {num_tests}")
    print(f"Successes:      {successes}")
    print(f"Doctype errors: {rejected}")
    print(f"Crashes:        {len(crashes)}")
    print(f"Hangs (>5s):    {len(hangs)}")
    print(f"Total time:     {elapsed_total:.2f}s")

    if crashes:
        print(f"\n{'=' * 60}")
        print("CRASH DETAILS:")
        print(f"{'=' * 60}")
        for crash in crashes[:10]:
            print(f"\nTest #{crash['test_num']}:")
            print(f"  HTML: {crash['html'][:200]!r}...")
            print(f"  Error: {crash['error']}")
        if len(crashes) > 10:
            print(f"\n... and {len(crashes) - 10} more crashes")

    if hangs:
        print(f"\n{'=' * 60}")
        print("HANG DETAILS:")
        print(f"{'=' * 60}")
        for hang in hangs[:5]:
            print(f"\nTest #{hang['test_num']} ({hang['time']:.2f}s):")
            print(f"  HTML: {hang['html'][:200]!r}...")

    if save_failures and (crashes or hangs):
        filename = f"fuzz_failures_{int(time.time())}.txt"
        with open(filename, "w") as f:
            f.write(f"Seed: {seed}\n\n")
            for crash in crashes:
                f.write(f"=== CRASH #{crash['test_num']} ===\n")
                f.write(f"HTML:\n{crash['html']}\n")
                f.write(f"Traceback:\n{crash['traceback']}\n\n")
            for hang in hangs:
                f.write(f"=== HANG #{hang['test_num']} ({hang['time']:.2f}s) ===\n")
                f.write(f"HTML:\n{hang['html']}\n\n")
        print(f"\nFailures saved to {filename}")

    return not crashes and not hangs


def main():
    parser = argparse.ArgumentParser(description="Fuzz the CompactHTML minimizer with malformed input")
    parser.add_argument("--num-tests", "-n", type=int, default=1000, help="Number of test cases (default: 1000)")
    parser.add_argument("--seed", "-s", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    parser.add_argument("--save-failures", action="store_true", help="Save failures to a file")
    parser.add_argument(
        "--sample",
        type=int,
        metavar="N",
        help="Just print N sample fuzzed HTML documents (no minimizing)",
    )
    args = parser.parse_args()

    if args.sample:
        if args.seed is not None:
            random.seed(args.seed)
        for i in range(args.sample):
            print(f"=== Sample {i + 1} ===")
            print(generate_fuzzed_html())
            print()
        return

    success = run_fuzzer(args.num_tests, seed=args.seed, verbose=args.verbose, save_failures=args.save_failures)
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
