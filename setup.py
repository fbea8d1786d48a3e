from setuptools import setup

meta = {}
with open("pydatadriven/meta.py") as fp:
    exec(fp.read(), meta)

# Package meta-data.
NAME = meta['__title__']
DESCRIPTION = 'Python data-driven estimation of linear operators.'
URL = 'https://github.com/pydatadriven/PyDataDriven'
MAIL = meta['__mail__']
AUTHOR = meta['__author__']
VERSION = meta['__version__']
KEYWORDS = 'dynamic-mode-decomposition dmd fbdmd tdmd dmdc system-identification'

REQUIRED = [
    'numpy', 'scipy', 'matplotlib',
]

EXTRAS = {
    'docs': ['Sphinx', 'sphinx_rtd_theme'],
    'test': ['pytest', 'pytest-cov'],
}

LDESCRIPTION = (
    "PyDataDriven is a Python package that estimates linear operators "
    "from measured trajectories of a dynamical system.\n"
    "\n"
    "Given the sampled states of a system, and optionally their time "
    "derivatives and the control inputs acting on it, PyDataDriven "
    "estimates the linear map advancing the state one step in time "
    "(discrete problems) or its time derivative (continuous problems) "
    "through Dynamic Mode Decomposition (DMD).\n"
    "\n"
    "Four estimators are available: the pseudo-inverse DMD, the truncated "
    "SVD DMD, the total least squares DMD, which removes the bias due to "
    "the noise affecting both snapshot matrices, and the forward/backward "
    "DMD. All of them support control inputs, either with unknown or "
    "known control matrix.\n"
    "\n"
    "The estimated operator is returned with its eigendecomposition, the "
    "projection basis of the reduced space, the trajectory reconstructed "
    "from the initial condition and the accuracy metrics of the "
    "reconstruction.\n"
)

setup(
    name=NAME,
    version=VERSION,
    description=DESCRIPTION,
    long_description=LDESCRIPTION,
    author=AUTHOR,
    author_email=MAIL,
    classifiers=[
        'Development Status :: 4 - Beta',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Intended Audience :: Science/Research',
        'Topic :: Scientific/Engineering :: Mathematics'
    ],
    keywords=KEYWORDS,
    url=URL,
    license='MIT',
    packages=[NAME],
    install_requires=REQUIRED,
    extras_require=EXTRAS,
    include_package_data=True,
    zip_safe=False,
)
