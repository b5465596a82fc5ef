import subprocess
import sys

FORMAT_TARGETS = ["receptro", "tests", "ui", "cli.py", "commands"]
TYPE_CHECK_TARGETS = ["receptro", "cli.py", "commands"]


def _run(step: str, target: str, args: list[str], failures: list[str]) -> bool:
    result = subprocess.run(args, stdout=subprocess.DEVNULL)
    if result.returncode != 0:
        failures.append(f"{target}: {step} failed")
        return False
    return True


def clean() -> None:
    """Format the package, tests, ui and cli, then type check the package"""
    failures: list[str] = []
    successes: list[str] = []

    for target in FORMAT_TARGETS:
        print(f"🧹 Formatting {target}...")
        ok = _run(
            "autoflake",
            target,
            [
                "autoflake",
                "--remove-all-unused-imports",
                "--remove-unused-variables",
                "--recursive",
                target,
                "-i",
                "--exclude=__init__.py",
            ],
            failures,
        )
        ok = _run("isort", target, ["isort", target, "--profile", "black"], failures) and ok
        ok = _run("black", target, ["black", target], failures) and ok
        if ok:
            successes.append(target)

    print("🔍 Type checking...")
    result = subprocess.run(["mypy", *TYPE_CHECK_TARGETS])
    if result.returncode != 0:
        failures.append("mypy type check failed")
    else:
        successes.append("mypy")

    print(f"\n{'='*60}")
    print("📊 SUMMARY")
    print(f"{'='*60}")
    print(f"✅ Successful: {len(successes)}")
    for item in successes:
        print(f"   ✓ {item}")

    if failures:
        print(f"\n❌ Failed: {len(failures)}")
        for failure in failures:
            print(f"   ✗ {failure}")

    print(f"\n{'='*60}")
    if failures:
        print("❌ Code quality checks FAILED")
        print(f"{'='*60}")
        sys.exit(1)
    else:
        print("✅ All code quality checks PASSED")
        print(f"{'='*60}")
        sys.exit(0)
