"""The class exercised by ``my_class_spec.py``."""


class MyClass:
    is_awesome = True
    prime = 11

    @property
    def hello(self) -> str:
        return "Hello world"
