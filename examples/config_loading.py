"""config_loading.py"""

from argvet.config import loader

cli = loader("argvet.yaml")

if __name__ == "__main__":
    print(cli.parse())
