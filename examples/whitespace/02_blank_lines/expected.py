import os


class Config:
    root = os.getcwd()

    def path(self, name):
        return os.path.join(self.root, name)


def load():
    return Config()
