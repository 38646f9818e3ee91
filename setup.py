from setuptools import setup, find_packages

setup(
    name="sliding-dft",
    version="0.1",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["cli"],
    install_requires=["numpy", "scipy", "PyQt5", "pyqtgraph"],
    extras_require={
        "hdf5": ["h5py"],
        "test": ["pytest", "h5py"],
    },
    entry_points={
        "console_scripts": [
            "sdft_gui=cli:sdft_gui",
            "sdft_info=cli:sdft_info",
            "sdft_stream=cli:sdft_stream",
        ]
    },
)
