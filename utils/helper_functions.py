import yaml
from pathlib import Path
from typing import Union

# ------------------------------------------------------------
# ---------------------Utility Functions----------------------
# ------------------------------------------------------------

def load_yaml(path: Union[str, Path]) -> dict:
    """
    Load the yaml file present at path into a dictionary

    Args:
        path (str | Path): yaml file source path

    returns:
        dict: contents of yaml file as a dictionary, empty if the file is blank
    """
    with open(path, "r") as f:
        return yaml.safe_load(f) or {}
