import os
import subprocess


# Fallback for source distributions, git tags take precedence in the repo
version = "0.1.0"

try:
    description = subprocess.check_output(
        "git describe --tags".split(),
        stderr=subprocess.STDOUT,
        cwd=os.path.dirname(os.path.abspath(__file__)),
        universal_newlines=True).rstrip()

except (subprocess.CalledProcessError, OSError):
    pass

else:
    parts = description.lstrip("v").split("-")
    if len(parts) == 1:  # tagged release
        version = parts[0]
    elif len(parts) == 3:  # tag + a few commits
        version = "{}.post{}+{}".format(*parts)
