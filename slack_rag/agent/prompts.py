"""
Prompts for answering questions from Slack history.
"""

NO_CONTEXT_ANSWER = "I couldn't find any relevant information to answer your question."

INSUFFICIENT_CONTEXT_ANSWER = "I don't have enough information to answer that question."


def get_rag_prompt(context: str, question: str) -> str:
    """
    Build the grounded-answer prompt.

    Args:
        context: Retrieved message content, most relevant first
        question: The user's question

    Returns:
        Prompt string
    """
    return f"""You are a helpful assistant that answers questions based on the provided context.

Context:
{context}

Question: {question}

Answer the question based only on the provided context. If the context doesn't contain the information needed to answer the question, say "{INSUFFICIENT_CONTEXT_ANSWER}"
"""
