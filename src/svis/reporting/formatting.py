def format_bytes(n: int) -> str:
    kilos = n / 1024
    megs = kilos / 1024

    if megs > 1:
        return f"{megs:.2f} MiB"
    if kilos > 1:
        return f"{kilos:.2f} KiB"
    return f"{n} B"


def format_percentage(numerator: int, denominator: int) -> str:
    if denominator == 0:
        return "0.00%"
    return f"{numerator / denominator * 100:.2f}%"
