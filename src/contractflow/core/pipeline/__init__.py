# src/contractflow/core/pipeline/__init__.py
"""
# Pipeline Core (ContractFlow)

Contratos canônicos e estruturas fundamentais de um workflow.

## Componentes

- **types**
  - `StepKind`: conjunto fechado dos 8 kinds de Step
  - `StepStatus`: idle → running → success | error
  - `StepOutput`: resultado imutável de um handler

- **graph**
  - `Node`, `Connection`, `WorkflowGraph`: modelo do grafo do editor

- **step**
  - `StepHandler` (Protocol): contrato de handler por kind

- **context**
  - `ExecutionContext`: saídas write-once, lookup por kind, logs, warnings

- **registry**
  - `HandlerRegistry`: tabela kind → handler com verificação de exaustividade
"""
