"""Line reader: split source bytes into lines and apply private markers"""

PRIVATE_PREFIX = "; "


def read_lines(data: bytes, include_private: bool = False) -> list[str]:
    """Split data on line feeds, stripping or dropping `; ` private lines.

    A trailing line feed does not produce a final empty line. Private lines
    keep their position when included and are removed outright otherwise.
    """
    text = data.decode("utf-8") if isinstance(data, bytes) else data
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()

    result = []
    for line in lines:
        if line.startswith(PRIVATE_PREFIX):
            if include_private:
                result.append(line[len(PRIVATE_PREFIX):])
        else:
            result.append(line)
    return result
