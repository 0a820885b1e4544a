import os

from setuptools import setup


ver_path = os.path.join(os.path.dirname(__file__), 'pngchunks', 'version.py')
with open(ver_path) as ver_file:
    __version__ = ''
    exec(compile(ver_file.read(), ver_path, 'exec'))


requires = ['attrs']
test_requires = ['pytest']

classifiers = [
    'Environment :: Console',
    'Programming Language :: Python :: 3',
    'Topic :: Multimedia :: Graphics',
]

setup(
    name='pngchunks',
    version=__version__,
    description='Read, edit and write the chunks of PNG files',
    classifiers=classifiers,
    author='Colin Dunklau',
    author_email='colin.dunklau@gmail.com',
    url='',
    keywords='png chunk crc',
    packages=['pngchunks', 'pngchunks.tests'],
    include_package_data=True,
    zip_safe=False,
    python_requires='>=3.7',
    install_requires=requires,
    extras_require={'test': test_requires},
    entry_points={'console_scripts': ['pngchunks = pngchunks.main:main']},
)
