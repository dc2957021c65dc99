
def tokenize_query(query_norm: str) -> list[str]:
    """Split a normalized query into its match tokens.

    The whole query is always the first token, followed by each distinct
    whitespace-separated word. No stemming, no stop words.

    Example:
        >>> tokenize_query("turbo engine")
        ['turbo engine', 'turbo', 'engine']
        >>> tokenize_query("")
        []
    """
    query_norm = (query_norm or "").strip()
    if not query_norm:
        return []
    tokens = [query_norm]
    for word in query_norm.split():
        if word not in tokens:
            tokens.append(word)
    return tokens


if __name__ == "__main__":
    from tclogger import logger

    from converters.text import normalize_text

    for query in ["turbo engine", "ｂｍｗ", "  ", "a a b"]:
        logger.note(f"> {query!r}:", end=" ")
        logger.success(f"{tokenize_query(normalize_text(query))}")

    # python -m converters.query.tokenizer
