from setuptools import setup, find_packages

setup(
    name='shaderpack',
    version='0.1.0',
    description='GLSL #include preprocessor with #line diagnostics and #version reconciliation',
    py_modules=['shaderpack', 'builder'],
    packages=find_packages(exclude=['tests', 'tests.*']),
    python_requires='>=3.8',
    install_requires=[
        'lark',
        'pydantic>=2.0',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'shaderpack = shaderpack:main',
        ],
    },
)
