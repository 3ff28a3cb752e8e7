"""Textos exibidos ao usuário pelo bot."""

WELCOME_USER = (
    "Olá {name}! Sou o bot do Azure DevOps: consulto builds, releases e aprovações "
    "das suas contas. Ao usar o bot você concorda com os termos de uso: {eula}"
)

MAIN_OPTIONS_TITLE = "O que você deseja fazer?"
MAIN_OPTIONS_SUBTITLE = "Escolha uma das opções abaixo"

NOT_CONNECTED = "Você ainda não está conectado ao Azure DevOps. Autorize o bot e tente novamente."
NO_PROJECT = "Nenhum team project selecionado. Use o comando 'connect' primeiro."
NO_ACCOUNTS = "Nenhuma conta do Azure DevOps encontrada para o seu perfil."
CONNECT_PROMPT = "Informe a conta e o team project no formato conta/projeto."
PROJECT_NOT_FOUND = "Team project '{project}' não encontrado na conta '{account}'."
CONNECTED = "Conectado a {account}/{project}."

NO_BUILD_DEFINITIONS = "Nenhuma definição de build em {project}."
QUEUE_PROMPT = "Digite 'queue <id>' para enfileirar um build."
BUILD_QUEUED = "Build {number} (#{id}) enfileirado."

NO_RELEASE_DEFINITIONS = "Nenhuma definição de release em {project}."
CREATE_PROMPT = "Digite 'create <id>' para criar uma release."
RELEASE_CREATED = "Release {name} (#{id}) criada."

NO_APPROVALS = "Nenhuma aprovação pendente para você em {project}."
APPROVAL_PROMPT = "Digite 'approve <id> [comentário]' ou 'reject <id> [comentário]'."
APPROVAL_CHANGED = "Aprovação #{id}: {status}."

TURN_ERROR = "Desculpe, algo deu errado ao processar sua mensagem. Tente novamente."
