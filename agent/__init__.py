# =============================================================================
# agent/__init__.py
# =============================================================================
# Orchestration layer: turns a free-text query into an answer.
#
#   capabilities.py  what the agent CAN do (registry, grouped into strands)
#   planner.py       which capabilities a query needs (LLM or keyword rules)
#   executor.py      runs them concurrently, isolating failures
#   synthesizer.py   one answer from all outcomes (LLM or template)
#   llm.py, prompt.py  the Google ADK + LiteLlm collaborators and their prompts
#   context.py       the per-process dependencies, injected explicitly
#   orchestrator.py  StrandsAgent.handle(query), the exposed operation
#
# No scoring, scheduling or data access lives here; that is core/.
# =============================================================================
