from chestgui.window.main_window import MainWindow
from chestgui.core.configs import EditorConfig
from chestgui import logger

import importlib.util
import ast
import typer
from pathlib import Path
from PySide6.QtWidgets import QApplication

app_cli = typer.Typer()


def find_and_import_subclass(file_path: str, base_class_name: str):
    """
    Find and import the first subclass of a given base class in a Python file.

    Args:
        file_path (str): The path to the Python file to inspect.
        base_class_name (str): The name of the base class to look for subclasses of.

    Returns:
        type: The first subclass found, or None if no subclass is found.
    """
    with open(file_path, "r") as file:
        tree = ast.parse(file.read(), filename=file_path)

    for node in ast.walk(tree):
        if isinstance(node, ast.ClassDef):
            for base in node.bases:
                if isinstance(base, ast.Name) and base.id == base_class_name:
                    module_name = Path(file_path).stem
                    spec = importlib.util.spec_from_file_location(
                        module_name, file_path
                    )
                    module = importlib.util.module_from_spec(spec)
                    spec.loader.exec_module(module)
                    return getattr(module, node.name)
    return None


def load_editor_config(project_dir: str = ".", configs_file: str | None = None):
    """Use the EditorConfig subclass of ``configs_file`` if it defines one."""
    config_class = None
    if configs_file:
        configs_file_path = Path(configs_file)
        if not configs_file_path.is_file():
            logger.warning(f"Configs file not found: {configs_file_path}")
        else:
            config_class = find_and_import_subclass(configs_file_path, "EditorConfig")

    if config_class:
        logger.info(f"Using EditorConfig subclass: {config_class.__name__}")
        return config_class(project_dir=project_dir)
    logger.info("No EditorConfig subclass found. Using default EditorConfig.")
    return EditorConfig(project_dir=project_dir)


@app_cli.command()
def run(
    project_dir: str = typer.Option(
        ".", help="The project directory to use for the application."
    ),
    configs_file: str = typer.Option(
        None,
        help="The Python file to search for an EditorConfig subclass.",
    ),
):
    """
    Run the chest GUI offset editor.

    Args:
        project_dir (str): The project directory to use for the application.
        configs_file (str): The Python file to search for an EditorConfig subclass.
    """
    main(load_editor_config(project_dir, configs_file))


def main(config: EditorConfig):

    # Initialize the application
    app = QApplication.instance() or QApplication([])
    window = MainWindow(config=config)
    window.show()
    app.exec()


if __name__ == "__main__":
    app_cli()
