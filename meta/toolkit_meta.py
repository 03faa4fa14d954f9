from dataclasses import dataclass, field
from typing import Dict, FrozenSet

SubPackage = str
Namespace = str

# Enum namespace -> Go subpackage that declares it.
DEFAULT_ENUM_NAMESPACES: Dict[Namespace, SubPackage] = {
    "Qt": "core",
    "QLocale": "core",
    "QFont": "gui",
    "QPalette": "gui",
    "QIcon": "gui",
    "QKeySequence": "gui",
    "QPainter": "gui",
    "QImage": "gui",
    "QDialogButtonBox": "widgets",
    "QFrame": "widgets",
    "QLineEdit": "widgets",
    "QLayout": "widgets",
    "QFormLayout": "widgets",
    "QAbstractItemView": "widgets",
    "QProgressBar": "widgets",
    "QSizePolicy": "widgets",
    "QAbstractSpinBox": "widgets",
    "QComboBox": "widgets",
    "QTabWidget": "widgets",
    "QSlider": "widgets",
    "QToolButton": "widgets",
    "QHeaderView": "widgets",
    "QAbstractScrollArea": "widgets",
    "QListView": "widgets",
    "QTextEdit": "widgets",
    "QPlainTextEdit": "widgets",
    "QDateTimeEdit": "widgets",
    "QCalendarWidget": "widgets",
    "QLCDNumber": "widgets",
    "QMdiArea": "widgets",
    "QMainWindow": "widgets",
    "QDockWidget": "widgets",
    "QTabBar": "widgets",
    "QToolBox": "widgets",
}

# Signal parameter types as written in the document -> Go parameter types.
DEFAULT_GO_PARAM_TYPES: Dict[str, str] = {
    "QString": "string",
    "bool": "bool",
    "int": "int",
    "double": "float64",
    "qreal": "float64",
    "float": "float32",
    "qint64": "int64",
    "qlonglong": "int64",
}


@dataclass
class ToolkitMetaModel:
    import_root: str = "github.com/therecipe/qt"
    translate_func: str = "core.QCoreApplication_Translate"
    always_imported: FrozenSet[SubPackage] = frozenset({"core", "widgets"})

    # Widgets constructed with an explicit window-flags argument.
    flagged_widgets: FrozenSet[str] = frozenset({"QWidget", "QFrame", "QLabel"})
    # Widgets using the parent-only constructor variant.
    parent_only_widgets: FrozenSet[str] = frozenset({"QToolBar"})
    box_layouts: FrozenSet[str] = frozenset({"QVBoxLayout", "QHBoxLayout"})

    enum_namespaces: Dict[Namespace, SubPackage] = field(
        default_factory=lambda: dict(DEFAULT_ENUM_NAMESPACES))
    go_param_types: Dict[str, str] = field(
        default_factory=lambda: dict(DEFAULT_GO_PARAM_TYPES))

    def import_line(self, subpackage: SubPackage) -> str:
        return f'"{self.import_root}/{subpackage}"'
