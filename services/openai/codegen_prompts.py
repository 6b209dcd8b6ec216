"""Prompt builder for training-script generation."""

from models.codegen_models import CodeGenConfig, MLFramework

SCRIPT_REQUIREMENTS = (
    "Include necessary imports.",
    "Define data transformations/augmentations.",
    "Define the dataset and dataloader (assume a standard folder structure 'data/train' and 'data/val').",
    "Define the model architecture.",
    "Define the loss function and optimizer.",
    "Write the training loop with validation steps.",
    "Save the best model.",
    "Add comments explaining key sections.",
)

CUSTOM_ARCHITECTURE_LINE = "- Architecture: Custom CNN (design the architecture from scratch, no pretrained weights)"


def build_training_script_prompt(config: CodeGenConfig) -> str:
    """Return the instruction that asks the model for a complete training script.

    Every config field is interpolated verbatim. The base model name is only
    included when transfer learning is enabled.
    """
    framework = config.framework.value if isinstance(config.framework, MLFramework) else str(config.framework)
    if config.use_transfer_learning:
        architecture_line = f"- Base Model: {config.base_model}"
    else:
        architecture_line = CUSTOM_ARCHITECTURE_LINE

    requirements = "\n".join(f"{index}. {item}" for index, item in enumerate(SCRIPT_REQUIREMENTS, start=1))

    return (
        "Act as a senior Machine Learning Engineer.\n"
        "Write a complete, runnable Python script for training an image classification model.\n"
        "\n"
        "Specifications:\n"
        f"- Framework: {framework}\n"
        f'- Dataset Name (simulated or folder path): "{config.dataset_name}"\n'
        f"- Number of Classes: {config.num_classes}\n"
        f"- Input Image Size: {config.image_size}x{config.image_size}\n"
        f"- Batch Size: {config.batch_size}\n"
        f"- Epochs: {config.epochs}\n"
        f"- Transfer Learning: {'Yes' if config.use_transfer_learning else 'No'}\n"
        f"{architecture_line}\n"
        "\n"
        "Requirements:\n"
        f"{requirements}\n"
        "\n"
        "Output ONLY the Python code. Do not output markdown backticks at the start or end."
    )
