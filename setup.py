from setuptools import setup, find_packages

setup(
    name="natspline",
    version="0.3.0",
    description="Natural splines of arbitrary degree on non-uniform knots",
    packages=find_packages(include=["natspline", "natspline.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.18",
        "scipy>=1.12",
        "wrapt",
        "matplotlib>=3",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={"console_scripts": ["natspline = natspline.frontend.console:main",],},
)
