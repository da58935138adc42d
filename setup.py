from setuptools import setup


setup(
    name="sheet-viewer",
    version="0.1.0",
    description="Render spreadsheet sheets as terminal tables, panels and trees, or as JSON",
    packages=["sheet_viewer"],
    install_requires=[
        "numpy",
        "pandas",
        "chardet",
        "openpyxl",
        "rich",
    ],
    extras_require={
        "excel-legacy": ["xlrd"],
        "ods": ["odfpy"],
        "all": ["xlrd", "odfpy"],
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "sheet-viewer=sheet_viewer.cli:main",
        ]
    },
)
