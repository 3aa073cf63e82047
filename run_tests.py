import os
import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent
PYTHON_DIR = os.path.join(ROOT, "src", "py")


def run(cmd, **kwargs):
    print(" ".join(cmd))
    subprocess.run(cmd, check=True, **kwargs)


def main():
    env = os.environ.copy()
    python_paths = [str(PYTHON_DIR)]
    if env.get("PYTHONPATH"):
        python_paths.append(env["PYTHONPATH"])
    env["PYTHONPATH"] = os.pathsep.join(python_paths)
    # Run python unit tests
    run(
        [sys.executable, "-m", "pytest", "-v", *sys.argv[1:]],
        cwd=PYTHON_DIR,
        env=env,
    )


if __name__ == "__main__":
    main()
